# miratope

A library for polytope geometry and symmetry groups in any number of
dimensions. It has these parts:

- **Geometry** (`miratope.geometry`): `Hypersphere` (reciprocation,
  circumspheres), `Subspace` (affine hulls, projection, flattening,
  distances, normals), `Hyperplane` (signed distance, segment
  intersection), `Segment`, and `MatrixOrd`. `MatrixOrd` is a matrix
  ordered lexicographically, and it treats entries that differ by at most
  `1e-7` as equal.
- **Coxeter diagrams** (`miratope.parse`, `miratope.cd`): parse diagrams
  written in inline ASCII notation, such as `x3o3o`, `s4s3o4o`,
  `(1.0)4(2.2)3(-3.0)`, `5/2` edges, or virtual nodes such as
  `x3o3o3o3o *c3o`. A `Cd` gives its nodes, edges, Coxeter matrix,
  generator point and circumradius.
- **Coxeter matrices** (`miratope.cox`): `Cox` has builders for the
  A, B, D, E, H and I2 families and for linear diagrams. It computes the
  mirror normals (`normals`) and an iterator over the reflection group
  (`gen_iter`).
- **Groups** (`miratope.group`, `miratope.gen_iter`, `miratope.cyclic`,
  `miratope.permutation`, `miratope.pairs`): `GenIter` lists every element
  of a generated group in breadth-first order. `Group` builds trivial,
  cyclic, dihedral, central-inversion, reflection, Coxeter, direct-product,
  swirl and step-prism groups. It also takes rotation subgroups and forms
  permutation representations.
- **Group element operations** (`miratope.group_item`): `MatrixOps`,
  `QuaternionOps`, `FloatOps`, `UnitOps` and `PermutationOps` let values of
  these types serve as group elements.

## Installation

```
pip install miratope
```

## Examples

Parse a Coxeter diagram and look at its Coxeter matrix:

```python
from miratope.parse import parse_cd

cd = parse_cd("x3o3x")
print(cd.nodes())
print(cd.cox()[0, 1])  # 3.0
print(cd.circumradius())
```

Count the elements of a symmetry group:

```python
from miratope.group import Group

h3 = Group.parse("o5o3o")
print(sum(1 for _ in h3))  # 120

b3 = Group.hypercube(3).cache()
print(sum(1 for _ in b3.rotations()))  # 24
```

A `Group` is an iterator, so it can be consumed only once. Call `cache()`
before deriving more than one group from it.

Reciprocate a point about a hypersphere:

```python
import numpy as np
from miratope.geometry import Hypersphere

print(Hypersphere.unit(2).reciprocate(np.array([3.0, 4.0])))  # [0.12 0.16]
```

## Errors

Parsing a malformed diagram raises a subclass of `miratope.cd.CdError`:

- `MismatchedParenthesisError`
- `UnexpectedEndingError`
- `ParseError`
- `InvalidSymbolError`
- `InvalidEdgeError`
- `RepeatEdgeError`

Most of these errors carry a `pos` attribute, the character offset where
parsing failed. `RepeatEdgeError` instead carries the two node indices `a`
and `b`.

## What this package does not do

This package has no polytope data structure. It cannot build, render or
display polytopes, and it does not read or write polytope files. It has no
command-line program. It is a library of geometry, Coxeter-diagram and
symmetry-group tools only.

## Running the tests

```
pip install -e ".[test]"
pytest
```