"""TabPFN environment provisioner (offline-ready).

Core design goals:
- Ordered, idempotent provisioning steps
- Every optional step gated by an environment flag
- Fail fast on install errors, warn on optional local dependencies
- Model weights cached locally for offline use
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
