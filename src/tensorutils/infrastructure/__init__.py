"""
Infrastructure layer: NumPy-backed implementations of the domain interfaces.

Subpackages
-----------
- ``storage``     : `ElementStorage`, the flat owned element buffer
- ``tensor``      : the concrete `Tensor` and its operation mixins
- ``contraction`` : contraction kernel registry (`loop`, `tensordot`)
- ``io``          : text and binary tensor files
- ``config``      : library-wide settings and logging setup
"""
