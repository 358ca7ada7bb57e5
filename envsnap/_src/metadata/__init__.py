# This package provides an interface for reading what is installed
# in an environment: which distributions exist, at which version,
# and which other distributions they declare as required.
#
# The snapshot builder and the restore engine only talk to the
# PackageMetadataStore protocol so tests can hand them a fake
# environment instead of the running interpreter's.
from envsnap._src.metadata.store import PackageMetadataStore
from envsnap._src.metadata.distributions import DistributionMetadataStore

__all__ = ["PackageMetadataStore", "DistributionMetadataStore"]
