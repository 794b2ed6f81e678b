# curvefft

Pure-Python building blocks for pairing-based proof systems, computed on the
CPU:

- `curvefft.fields`: prime fields and their elements, `pow_vartime`, and the
  32-bit limb layouts (`gpu_one`, `gpu_r2`, `gpu_modulus`) that describe a
  field to a device kernel. The BLS12-381 scalar and base fields are provided
  as `BLS12_381_FR` and `BLS12_381_FQ`.
- `curvefft.curve`: short Weierstrass curves with `AffinePoint` and
  Jacobian `ProjectivePoint`.
- `curvefft.fft_cpu`: radix-2 FFTs over field elements, serial and parallel.
- `curvefft.ec_fft_cpu`: the same FFTs over projective curve points.
- `curvefft.multiexp_cpu`: bucket-method multi-exponentiation with density
  tracking.
- `curvefft.threadpool`: a small thread pool helper (`Worker`, `Waiter`).
- `curvefft.errors`: `EcError`.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Field arithmetic

```python
from curvefft.fields import PrimeField, pow_vartime

fr = PrimeField("Fr", modulus=97, generator=5)
a = fr(10)
b = fr(20)
assert (a * b) * (a * b).inverse() == fr.one()
assert pow_vartime(a, 3) == a * a * a

print(fr.two_adicity())   # 5, since 96 = 2**5 * 3
print(fr.gpu_modulus())   # the modulus as little-endian 32-bit limbs
```

`pow_vartime` takes the exponent either as an int or as a sequence of 64-bit
limbs, least significant first. `root_of_unity(n)` returns a primitive n-th
root of unity for a power of two `n`, and raises `ValueError` when the field
has none of that order.

`gpu_one()` and `gpu_r2()` return `R mod p` and `R^2 mod p`, where `R` is
`2^(64 * limb_count())`, split into 32-bit limbs. A `QuadraticExtensionField`
reports the limbs of its base field and names it through `sub_field_name()`;
for a `PrimeField` that method returns `None`.

`gpu_name(module_path, type_name)` builds an identifier from the two strings,
replacing every character that is not an ASCII letter or digit with `_`.

## Curves

```python
from curvefft.curve import ShortWeierstrassCurve

curve = ShortWeierstrassCurve("toy", a, b, base_field, scalar_field, (gx, gy))
g = curve.generator_point()        # AffinePoint
p = g * 5                          # ProjectivePoint
assert p.to_affine().to_projective() == p
```

`curve.point(x, y)` raises `ValueError` when the point is not on the curve.
`curve.identity()` is the affine point at infinity and `curve.zero()` the
projective identity. `AffinePoint.to_gpu_repr()` gives the coordinate pair,
with the identity as two zeros.

## FFT

The input length must be `2 ** log_n` and `omega` a primitive root of unity
of that order; the list is transformed in place. A wrong length raises
`ValueError`.

```python
from curvefft.fft_cpu import serial_fft, parallel_fft
from curvefft.threadpool import Worker

values = [fr(i) for i in range(8)]
omega = fr.root_of_unity(8)
serial_fft(values, omega, 3)

worker = Worker()
parallel_fft(values, worker, omega, 3, 1)   # 2**1 sub-transforms
```

`parallel_fft` raises `ValueError` when `log_n` is smaller than
`log_threads`. `serial_ec_fft` and `parallel_ec_fft` in `curvefft.ec_fft_cpu`
do the same for lists of `ProjectivePoint`, with `omega` taken from the
curve's scalar field.

## Multi-exponentiation

```python
from curvefft.multiexp_cpu import BaseSource, FullDensity, multiexp_cpu

waiter = multiexp_cpu(worker, BaseSource(bases, 0), FullDensity(), exponents)
result = waiter.wait()   # a ProjectivePoint
```

`bases` is a list of `AffinePoint` and `exponents` a list of integers (the
canonical forms of the scalars); a `(bases, skip)` pair may be passed in
place of a `BaseSource`. A `DensityTracker` may be used instead of
`FullDensity`: only the bases whose bit is set are consumed, and its
`generate_exps` keeps the matching exponents. If the density map has a known
size that differs from the number of exponents, `multiexp_cpu` raises
`ValueError`.

`DensityTracker` holds its flags in `bits` and the number of set flags in
`total_density`; `extend(other, is_input_density)` appends another tracker,
merging the two first elements when `is_input_density` is true.

## Thread count

The pool size is read once from the `EC_GPU_NUM_THREADS` environment variable
and defaults to the number of CPUs. `Worker.log_num_threads()` gives its
floored binary logarithm.

## Errors

Running out of bases, or meeting the point at infinity among the bases of a
multi-exponentiation, raises `curvefft.errors.EcError`, whose message reads
`EcError: <description>`.

## What this package does not do

Everything runs on the CPU in Python. The limb layouts and identifiers in
`curvefft.fields` describe fields for device kernels, but the package neither
generates, compiles nor runs such kernels, and it has no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```