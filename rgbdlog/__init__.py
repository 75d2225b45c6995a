"""RGB-D frame logs and readers, camera frame buffering, ground-truth trajectories and run settings."""

__version__ = "0.1.0"