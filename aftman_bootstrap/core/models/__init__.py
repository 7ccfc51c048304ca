"""
Domain models — Pydantic types for the provisioning pipeline.

All models are re-exported here for convenient access:

    from aftman_bootstrap.core.models import Asset, ReleaseMetadata, ExecutionEnvironment
"""

from aftman_bootstrap.core.models.environment import ExecutionEnvironment
from aftman_bootstrap.core.models.process import ProcessResult
from aftman_bootstrap.core.models.release import Asset, ReleaseMetadata

__all__ = [
    # environment.py
    "ExecutionEnvironment",
    # process.py
    "ProcessResult",
    # release.py
    "Asset",
    "ReleaseMetadata",
]
