from .orchestrator import HDFSSetup, setup_hdfs
from .model import Phase, SetupResult, Step
from .runner import CIError, run_pipeline

__all__ = ["HDFSSetup", "setup_hdfs", "Phase", "SetupResult", "Step", "CIError", "run_pipeline"]
