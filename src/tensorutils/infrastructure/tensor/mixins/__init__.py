"""
Tensor operation mixins.

Each subpackage groups one family of `Tensor` methods:

- ``arithmetic``  : element-wise operators
- ``memory``      : factories, allocation, copies, conversion, assignment
- ``shape``       : reshape, first-axis slicing, transpose
- ``contraction`` : generalized tensor contraction
"""
