# rgbdlog

Building blocks for working with streams of RGB-D frames: reading recorded
binary frame logs, buffering frames handed over by a depth camera, loading
ground-truth camera trajectories and turning command-line flags into the
settings of a dense mapping session.

## Installing

```
pip install .
pip install .[test]   # adds pytest
```

The package needs `numpy` and `pillow`.

## What is in the package

| Module | Purpose |
| --- | --- |
| `rgbdlog.sync` | `SharedValue`, a value guarded by a lock, with a condition threads can wait on |
| `rgbdlog.camera` | `CameraInterface`, the ring of frame buffers a camera fills; `FrameSlot`, `VideoMode`, `PixelFormat`, `find_mode`, `strip_tabs`, `UnavailableCamera` |
| `rgbdlog.realsense` | `RealSenseCamera`, which always reports itself as unavailable |
| `rgbdlog.jpeg` | `decode_jpeg_bgr`, JPEG decoding into blue-green-red order; raises `JPEGDecodeError` |
| `rgbdlog.log_reader` | `LogReader`, the abstract interface of all frame sources, and `swap_red_blue` |
| `rgbdlog.raw_log_reader` | `RawLogReader` for binary frame logs, `write_raw_log` to produce them, `LogFormatError` |
| `rgbdlog.live_log_reader` | `LiveLogReader`, a frame source fed by a `CameraInterface` |
| `rgbdlog.ground_truth` | `GroundTruthOdometry` and `load_trajectory` for trajectory files |
| `rgbdlog.pose_match` | `PoseMatch` records of matched frames, with `max_span` |
| `rgbdlog.config` | `parse_args`, `Settings`, `Intrinsics` and `load_calibration` |

## Frame sources

Every frame source derives from `LogReader`. After `get_next()` it holds the
current frame in `timestamp`, `depth` (a `uint16` array of shape
height × width) and `rgb` (a `uint8` array of shape height × width × 3).
It also offers `get_back`, `num_frames`, `has_more`, `rewound`, `rewind`,
`fast_forward`, `file` and `set_auto`, and keeps count in `current_frame`.

`swap_red_blue(data)` returns a copy of interleaved three-channel pixel data
with the first and third channels exchanged, keeping the input's shape. It
raises `ValueError` if the length is not a multiple of three.

### Binary frame logs

A log is little-endian. It starts with a 32-bit frame count; each frame then
holds a 64-bit timestamp, the 32-bit sizes of its depth and colour blocks,
and the blocks themselves: 16-bit depth values, two bytes per pixel, and
8-bit RGB colour, three bytes per pixel. A colour block may be empty, in
which case the frame's colour image is all zeros.

`write_raw_log(path, frames)` writes such a file from
`(timestamp, depth, image)` tuples, where depth and image are bytes or
arrays.

`RawLogReader(path, flip_colors, width, height)` walks a log frame by frame.
It records where every frame it has read started, so it can step back
(`get_back`, which raises `IndexError` when there is nothing to go back to),
skip frames without decoding them (`fast_forward`) and start again from the
beginning (`rewind`). `has_more()` is true while `current_frame + 1` is less
than the frame count. A truncated file or a block smaller than one full image
raises `LogFormatError`. With `flip_colors` set, red and blue are swapped in
every frame read. The reader is a context manager:

```python
from rgbdlog.raw_log_reader import RawLogReader, write_raw_log

with RawLogReader("session.klg", False, 640, 480) as reader:
    print(reader.num_frames())
    while reader.has_more():
        reader.get_next()
        print(reader.timestamp, reader.current_frame)
```

### Live cameras

A camera derives from `CameraInterface(width, height)` and hands each frame
to `on_rgb_frame(data, timestamp)` and `on_depth_frame(data, timestamp)`;
without a timestamp the current time in milliseconds is used, and a frame of
the wrong size raises `ValueError`. Depth frames are paired with the most
recent colour frame in a ring of ten `FrameSlot` buffers, and
`latest_depth_index` only advances once a colour frame has arrived.

`UnavailableCamera(width, height, message)` is a camera whose `ok()` is
false and whose `error()` returns the message with tabs removed.
`RealSenseCamera(width, height, fps)` is such a camera: it always reports
that no RealSense support is present, ignores exposure and white-balance
changes, and reads both back as `False`.

`LiveLogReader(camera, flip_colors, base_dir, poll_interval)` prints its
progress to standard output and, if the camera is ok, waits until the first
paired frame is available. Each `get_next` copies the newest pair unless it
has already been read. A live source never runs out of frames, reports
`2**31 - 1` frames, cannot be rewound or stepped back, and its `file()` is
`base_dir` joined with `live`. `set_auto` switches the camera's automatic
exposure and white balance together.

```python
from rgbdlog.live_log_reader import LiveLogReader

reader = LiveLogReader(camera, False, "/data/", 0.033)
reader.get_next()
```

`VideoMode(width, height, fps, pixel_format)` describes a sensor mode;
`describe()` gives a line such as `640x480 @ 30fps 1mm`.
`find_mode(depth_modes, rgb_modes, width, height, fps)` tells whether both
sensors support a resolution and frame rate.

## JPEG images

`decode_jpeg_bgr(data)` decodes JPEG bytes into a height × width × 3 `uint8`
array in blue-green-red order and raises `JPEGDecodeError` for anything that
is not a readable JPEG image.

## Ground-truth trajectories

A trajectory file has one pose per line:

```
utime,x,y,z,qx,qy,qz,qw
```

`load_trajectory(path)` returns a dictionary of 4×4 `float32` poses keyed by
time and raises `ValueError` on a malformed line. `GroundTruthOdometry(path)`
looks poses up by timestamp: the first call to `get_transformation` anchors
the trajectory and returns the identity; later calls return the pose
converted out of the basis the file stores it in. A timestamp with no pose
raises `KeyError`. `covariance()` gives the fixed diagonal 6×6 covariance
`0.1, 0.1, 0.1, 0.5, 0.5, 0.5`.

```python
from rgbdlog.ground_truth import GroundTruthOdometry

odometry = GroundTruthOdometry("trajectory.csv")
pose = odometry.get_transformation(1305031102175304)
```

## Matched poses

`PoseMatch(first_id, second_id, t_wc_first, t_wc_second, constraints, fern)`
records two matched frames. `span()` is `second_id - first_id`, and
`max_span(matches)` is the largest span, never less than zero.

## Threads

`SharedValue(initial)` wraps a value for several threads: `assign`, `get`,
`increment`, `notify_all`, `assign_and_notify_all`, `wait_for_signal(timeout)`
(which raises `TimeoutError` if no notification comes in time) and
`get_after(wait_us)`, which sleeps for the given microseconds first.

## Settings

`parse_args(argv)` reads mapping-session flags (without the program name) and
returns a `Settings` object. An option that needs a value and has none, or a
number that does not parse, raises `ValueError`.

| Flag | Meaning | Default |
| --- | --- | --- |
| `-l <file>` | binary log to read | none |
| `-cal <file>` | calibration file, first line `fx fy cx cy` | 600 600 599 339 |
| `-p <file>` | ground-truth trajectory | none |
| `-c` | confidence threshold | 10 |
| `-d` | depth cutoff in metres | 3 |
| `-i` | ICP weight | 10 |
| `-ie` | ICP error threshold | 4e-05 |
| `-cv` | covariance threshold | 1e-05 |
| `-pt` | photometric threshold | 115 |
| `-ft` | fern threshold | 0.3095 |
| `-t` | time window | 200 |
| `-ic` | ICP inlier count threshold | 40000 |
| `-s` / `-e` | first and last frame | 1 / 65535 |
| `-f` | flip colour channels | off |
| `-o` | open loop (ignored when `-p` is given) | off |
| `-rl` | relocalisation | off |
| `-fs` | frame skipping | off |
| `-q` | quiet | off |
| `-fo` | fast odometry | off |
| `-r` | rewind | off |
| `-ftf` | frame-to-frame RGB tracking | off |
| `-nso` | disable SO(3) | SO(3) on |
| `-icl` | ICL-NUIM conventions | off |
| `-sc` | showcase mode | off |

`Settings` also carries the image size, 1200 × 680. `time_window()` returns
the `-t` value, or `(2**31 - 1) // 2` in open loop.

```python
from rgbdlog.config import parse_args

settings = parse_args(["-l", "session.klg", "-q", "-e", "500"])
print(settings.time_window())
```

`load_calibration(path)` reads a calibration file on its own and returns
`Intrinsics`; a first line with fewer than four numbers raises `ValueError`.

## What the package does not do

- It does no mapping, tracking or surface fusion: the settings describe such
  a run, but nothing here carries one out.
- It has no viewer or window and no command to run; `parse_args` only builds
  `Settings`.
- It talks to no camera hardware. A camera must be written on top of
  `CameraInterface` and fed frames; `RealSenseCamera` is always unavailable.
- `RawLogReader` reads uncompressed logs only. Compressed depth blocks and
  JPEG colour blocks are not decoded by the reader; `decode_jpeg_bgr` is
  available separately.