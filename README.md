# qoremotion

Tools for describing a motion-control station: the motion devices, the named
positions of each device, the graphs that connect those positions, and the
global motion settings. All of it is kept in one JSON configuration file.
The package also has a small logger that keeps recent messages in memory and
writes a dated log file.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Configuration file

```json
{
  "MotionDevices": {
    "gantry": {
      "IsEnabled": true,
      "IpAddress": "192.168.0.10",
      "Port": 701,
      "Id": 1,
      "Positions": {
        "home": {"x": 0.0, "y": 0.0, "z": 0.0},
        "load": {"x": 10.0, "y": 5.0, "z": 0.0}
      }
    }
  },
  "Graphs": {
    "process": {
      "Nodes": [
        {"Id": "n1", "Label": "Home", "Device": "gantry", "Position": "home"},
        {"Id": "n2", "Label": "Load", "Device": "gantry", "Position": "load"}
      ],
      "Edges": [
        {"Id": "e1", "Source": "n1", "Target": "n2",
         "Conditions": {"IsBidirectional": true}}
      ]
    }
  },
  "Settings": {"DefaultSpeed": 10.0, "LogLevel": "info"}
}
```

Every key is optional; a missing one keeps its default. Positions have the
axes `x`, `y`, `z`, `u`, `v` and `w`. Edge conditions are
`RequiresOperatorApproval`, `TimeoutSeconds` and `IsBidirectional`. Settings
are `DefaultSpeed` (10.0), `DefaultAcceleration` (5.0), `LogLevel` ("info"),
`AutoReconnect` (true), `ConnectionTimeout` (5000) and `PositionTolerance`
(0.001).

Loading raises `ConfigError` when the file cannot be opened, is not valid
JSON, holds a value of the wrong type, or has no devices.

## Data types

`qoremotion.motion_types` holds the dataclasses `Position`, `MotionDevice`,
`Node`, `EdgeConditions`, `Edge`, `Graph` and `Settings`. Each has a
`from_dict` class method that reads the JSON form (`MotionDevice.from_dict`
also takes the device name) and raises `TypeError` on a value of the wrong
type, and a `to_dict` method that writes it back.

## Using the configuration manager

```python
from qoremotion.config_manager import MotionConfigManager, ConfigError
from qoremotion.motion_types import Position

config = MotionConfigManager("station.json")

device = config.get_device("gantry")
home = config.get_named_position("gantry", "home")

path = config.find_path("process", "n2", "n1")
print([node.id for node in path])      # ['n2', 'n1']

config.add_position("gantry", "inspect", Position(x=1.0, y=2.0, z=3.0))
config.save_config()                   # back to station.json
config.save_config("copy.json")        # or to another file
```

Queries: `devices()`, `enabled_devices()`, `get_device()`,
`get_device_positions()`, `get_named_position()`, `graphs()`, `get_graph()`,
`get_node_by_id()`, `get_nodes_by_device()`, `get_edges_by_source()`,
`find_path()` and `settings()`. Lookups of unknown names return `None`, or an
empty list for the list-returning ones.

`find_path` runs a breadth-first search. It follows edges from source to
target, and also from target to source when the edge is marked
bidirectional. It returns an empty list when there is no path.

Edits: `add_device`, `update_device`, `delete_device`, `add_position`,
`delete_position`, `update_graph` and `update_settings`. They change only the
configuration in memory; call `save_config` to write it out. `save_config`
writes indented JSON with sorted keys and returns `False` if the file cannot
be written.

- Adding a device whose name already exists raises `ConfigError`.
- Updating a device, or adding a position to a device, that does not exist
  raises `ConfigError`; so does updating a graph that does not exist.
- `delete_device` and `delete_position` return `False` for an unknown device
  or position, and raise `ConfigError` when a graph node still refers to it.

## Logging

```python
from qoremotion.logger import Logger, LogLevel

log = Logger.get_instance()            # writes to logs/log_YYYY-MM-DD.txt
log.info("station ready")
log.set_console_level(LogLevel.WARNING)
log.save_logs_to_file("session.txt")
```

A `Logger` can also be made directly with another directory,
`Logger("my_logs")`, and used as a context manager that closes its file on
exit. Levels are `DEBUG`, `INFO`, `WARNING` and `ERROR`. By default messages
of level `INFO` and above go to the console (errors to standard error) and
all messages go to the file; `set_console_level`, `set_file_level` and
`enable_console_output` change that. A new file is started when the date
changes.

The logger keeps the 1000 most recent messages in memory, returned by
`messages()` and emptied by `clear()`. Each line has the form
`[HH:MM:SS] [LEVEL] message`.

## What it does not do

The package does not connect to or command motion controllers: it has no
network connection, no axis motion, homing, servo or velocity control, and no
command-line program. It only reads, edits and writes the station
configuration and keeps logs.