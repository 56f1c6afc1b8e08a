# createsim

Pure-Python building blocks for simulating a Create 3 style mobile robot.
It provides sensor models, interface buttons, a button panel and simple
motion control, and it has no runtime dependencies.

Message types are plain dataclasses. Components publish through callables
that you pass in, such as `publish`, `publish_opcode`, `advertise` or
`notify`. Each callback method also returns what it published. This lets
the components plug into any transport or test harness.

## Installation

```
pip install .
```

To install the test tools as well:

```
pip install .[test]
```

## Modules

### Geometry and messages

`createsim.geometry` provides the math types and helpers:

- `Vector3`: an immutable vector.
- `Quaternion`: includes `from_rpy` and `yaw`.
- `Transform`: a rigid transform with a normalized rotation. Includes
  `identity` and `inverse_times`.
- `PolarCoordinate` and `to_polar`.
- `normalize_angle`, which wraps an angle into [-pi, pi].
- `shortest_angular_distance`.
- `transform_to_yaw`.
- `object_wrt_frame`.
- `static_link_wrt_global_frame`.

`createsim.messages` provides the message dataclasses:

- `Header`.
- `Pose`, with `to_transform` and `from_transform`.
- `Odometry`, `TransformStamped` and `Twist`.
- `HazardType`, `HazardDetection` and `HazardDetectionVector`.
- `JointState` and `LaserScan`.
- `tf_message_to_odom`, which builds an `Odometry` from one entry of a list
  of `TransformStamped`.

### Motion control

`createsim.behaviors_scheduler.BehaviorsScheduler` holds one active behavior
at a time. A behavior is described by `BehaviorsData`:

- `run_func` produces a command each iteration.
- `is_done_func` reports when the behavior has finished.
- `cleanup_func` runs when the behavior is pre-empted.
- `stop_on_new_behavior` and `apply_backup_limits` are flags.

`set_behavior` returns `False` in two cases: when the data is incomplete,
and when the current behavior does not allow itself to be replaced.
`run_behavior(RobotState)` runs one iteration. It returns a `Twist` or
`None`.

`createsim.simple_goal_controller.SimpleGoalController` follows a path of
`CmdPathPoint` goals. Each point has a pose, an arrival radius and a
`drive_backwards` flag. For each goal the controller does three things in
order:

1. It turns toward the goal.
2. It drives to the goal, limited by the maximum translation speed.
3. It turns to the goal's final heading.

Rotation is limited to the given maximum. A small rotation that is not
zero is raised to a minimum of 0.1 rad/s.

### Sensor models

`createsim.ir_opcode.IrOpcode` tracks the dock emitter pose and the robot
receiver pose. You feed those poses to it with `emitter_pose_callback` and
`receiver_pose_callback`. It has two receivers, omni and directional
front, and it computes buoy opcodes and force-field opcodes for them. The
opcodes are listed in `Opcode`.

- `update_opcodes` publishes `IrOpcodeMessage`s. It is meant to be called
  at about 62 Hz.
- `update_dock_status` publishes a `DockStatus`. It is meant to be called
  at about 20 Hz.

`createsim.wheel_drop.WheelDrop` reads suspension joint travel from
`JointState` messages. It applies hysteresis between 95% and 75% of a
0.03 m threshold. While a wheel is dropped, it emits a `WHEEL_DROP`
hazard for that wheel.

`createsim.cliff.Cliff` emits a `CLIFF` hazard when the closest reading
of a `LaserScan` is beyond 0.03 m.

`createsim.ir_intensity.IrIntensity` converts scans into
`IrIntensityMessage` values. `scaled_intensity` gives the intensity
curve: `3500 * exp(-2e * d / range_max)`, truncated to an integer.

`Cliff` and `IrIntensity` both route messages in the same way:

- A sensor is bound to every publish topic whose name contains the
  sensor's name. If several topics match, the last one wins.
- Each scan is published for every sensor name found in its frame id.
- If that sensor has no topic, `KeyError` is raised.

### Buttons

`createsim.interface_buttons.InterfaceButtons` applies raw button codes
(`Create3Buttons`) to an `InterfaceButtonsMessage` state:

- A press code marks the button as pressed and records the start time.
- `NONE` releases every held button and records how long each was held.
- An unknown code is logged and the state is left unchanged.

Every call publishes a copy of the state.

`createsim.hmi.Create3Hmi` models the button panel:

- `load_config` accepts an XML string or element. It sets the default
  title and reads an optional `<namespace>` element.
- `set_namespace` re-advertises the button topic as
  `<namespace>/create3_buttons` and notifies the user of the result.
- `on_create3_button` publishes a button code and returns whether the
  publish succeeded.

## Example

```python
from createsim.geometry import Quaternion, Transform, Vector3
from createsim.simple_goal_controller import CmdPathPoint, SimpleGoalController

goal = Transform(Vector3(1.0, 0.0, 0.0), Quaternion.from_rpy(0.0, 0.0, 0.0))
controller = SimpleGoalController()
controller.initialize_goal([CmdPathPoint(goal, 0.05, False)], 1.0, 0.3)

pose = Transform.identity()
print(controller.get_velocity_for_position(pose))  # already facing the goal: zero Twist
print(controller.get_velocity_for_position(pose))  # drive: linear.x == 0.3
```

`get_velocity_for_position` returns `None` once the path is finished.

## What the package does not do

- It has no model of the optical mouse sensor.
- It does not republish ground-truth transforms as odometry.
- It does not convert joint states into dynamic joint states.
- It provides no transport, node runner or command-line program. You
  connect the components yourself by passing publishing callables and
  calling their callback and update methods.

## Running the tests

```
pytest
```