#
# Arbitrary-precision signed integers in sign-magnitude, big-endian byte storage
#
# (c) The bigbigint authors 2026.  All rights reserved.
#

from .context import *
from .natives import *
from .bigint import *

from . import context, natives, bigint


__all__ = context.__all__ + natives.__all__ + bigint.__all__
