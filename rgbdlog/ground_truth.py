"""Ground-truth camera poses read from a trajectory file."""

from __future__ import annotations

import os

import numpy as np

# Poses are stored in the iSAM basis; this maps between the two.
_BASIS = np.array(
    [[0, 0, 1, 0], [-1, 0, 0, 0], [0, -1, 0, 0], [0, 0, 0, 1]], dtype=np.float32
)
_BASIS_INV = np.linalg.inv(_BASIS).astype(np.float32)


def _quaternion_matrix(qw: float, qx: float, qy: float, qz: float) -> np.ndarray:
    tx, ty, tz = 2 * qx, 2 * qy, 2 * qz
    twx, twy, twz = tx * qw, ty * qw, tz * qw
    txx, txy, txz = tx * qx, ty * qx, tz * qx
    tyy, tyz, tzz = ty * qy, tz * qy, tz * qz
    return np.array(
        [
            [1 - (tyy + tzz), txy - twz, txz + twy],
            [txy + twz, 1 - (txx + tzz), tyz - twx],
            [txz - twy, tyz + twx, 1 - (txx + tyy)],
        ],
        dtype=np.float32,
    )


def load_trajectory(path) -> dict[int, np.ndarray]:
    """Read ``utime,x,y,z,qx,qy,qz,qw`` lines into 4x4 float32 poses keyed by time."""
    trajectory: dict[int, np.ndarray] = {}
    with open(os.fspath(path), encoding="utf-8") as fp:
        for number, line in enumerate(fp, start=1):
            if not line.strip():
                continue
            fields = [field.strip() for field in line.split(",")]
            if len(fields) != 8:
                raise ValueError(f"line {number}: expected 8 fields, got {len(fields)}")
            try:
                utime = int(fields[0])
                x, y, z, qx, qy, qz, qw = (float(f) for f in fields[1:])
            except ValueError as exc:
                raise ValueError(f"line {number}: {exc}") from exc
            pose = np.eye(4, dtype=np.float32)
            pose[:3, :3] = _quaternion_matrix(qw, qx, qy, qz)
            pose[:3, 3] = (x, y, z)
            trajectory[utime] = pose
    return trajectory


class GroundTruthOdometry:
    """Looks up ground-truth poses by timestamp."""

    def __init__(self, path) -> None:
        self.trajectory = load_trajectory(path)
        self.last_utime = 0

    def get_transformation(self, timestamp: int) -> np.ndarray:
        """Return the pose at ``timestamp`` in the camera basis.

        The first call anchors the trajectory and returns the identity.
        Raises KeyError if the timestamp has no recorded pose.
        """
        pose = np.eye(4, dtype=np.float32)

        if self.last_utime != 0:
            if self.last_utime not in self.trajectory:
                self.last_utime = timestamp
                return pose
            if timestamp not in self.trajectory:
                raise KeyError(f"no ground-truth pose at time {timestamp}")
            pose = (_BASIS_INV @ self.trajectory[timestamp] @ _BASIS).astype(np.float32)
        else:
            if timestamp not in self.trajectory:
                raise KeyError(f"no ground-truth pose at time {timestamp}")
            self.trajectory[self.last_utime] = self.trajectory[timestamp]

        self.last_utime = timestamp
        return pose

    def covariance(self) -> np.ndarray:
        """Return the fixed 6x6 pose covariance."""
        return np.diag([0.1, 0.1, 0.1, 0.5, 0.5, 0.5])