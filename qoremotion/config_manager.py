"""Loading, querying, editing and saving a motion configuration file."""

from __future__ import annotations

import copy
import json
import sys
from collections import deque
from pathlib import Path
from typing import Any, Mapping

from qoremotion.motion_types import Edge, Graph, MotionDevice, Node, Position, Settings


class ConfigError(RuntimeError):
    """Raised when a configuration cannot be loaded or an edit is not allowed."""


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


class MotionConfigManager:
    """Motion devices, their positions, transition graphs and global settings."""

    def __init__(self, config_path: str | Path) -> None:
        self._config_path = Path(config_path)
        self._devices: dict[str, MotionDevice] = {}
        self._graphs: dict[str, Graph] = {}
        self._settings = Settings()
        try:
            self._load(self._config_path)
        except ConfigError as exc:
            print(f"Error loading configuration: {exc}", file=sys.stderr)
            raise

    def _load(self, path: Path) -> None:
        try:
            with open(path, encoding="utf-8") as handle:
                data = json.load(handle)
        except OSError as exc:
            raise ConfigError(f"Could not open configuration file: {path}") from exc
        except ValueError as exc:
            raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

        data = _as_mapping(data)
        try:
            devices = data.get("MotionDevices")
            if isinstance(devices, Mapping):
                for name, device_data in devices.items():
                    device = MotionDevice.from_dict(name, _as_mapping(device_data))
                    self._devices[name] = device

            graphs = data.get("Graphs")
            if isinstance(graphs, Mapping):
                for name, graph_data in graphs.items():
                    self._graphs[name] = Graph.from_dict(_as_mapping(graph_data))

            settings = data.get("Settings")
            if isinstance(settings, Mapping):
                self._settings = Settings.from_dict(settings)
        except TypeError as exc:
            raise ConfigError(str(exc)) from exc

        if not self._devices:
            print("Warning: No devices found in configuration", file=sys.stderr)
            raise ConfigError("Invalid configuration format")

    # Queries

    def devices(self) -> dict[str, MotionDevice]:
        """All devices, ordered by name."""
        return dict(sorted(self._devices.items()))

    def get_device(self, device_name: str) -> MotionDevice | None:
        return self._devices.get(device_name)

    def enabled_devices(self) -> dict[str, MotionDevice]:
        """Enabled devices, ordered by name."""
        return {name: dev for name, dev in sorted(self._devices.items()) if dev.is_enabled}

    def get_device_positions(self, device_name: str) -> dict[str, Position] | None:
        device = self._devices.get(device_name)
        if device is None:
            return None
        return dict(sorted(device.positions.items()))

    def get_named_position(self, device_name: str, position_name: str) -> Position | None:
        device = self._devices.get(device_name)
        if device is None:
            return None
        return device.positions.get(position_name)

    def graphs(self) -> dict[str, Graph]:
        """All graphs, ordered by name."""
        return dict(sorted(self._graphs.items()))

    def get_graph(self, graph_name: str) -> Graph | None:
        return self._graphs.get(graph_name)

    def get_node_by_id(self, graph_name: str, node_id: str) -> Node | None:
        graph = self._graphs.get(graph_name)
        if graph is None:
            return None
        return next((node for node in graph.nodes if node.id == node_id), None)

    def get_nodes_by_device(self, graph_name: str, device_name: str) -> list[Node]:
        graph = self._graphs.get(graph_name)
        if graph is None:
            return []
        return [node for node in graph.nodes if node.device == device_name]

    def get_edges_by_source(self, graph_name: str, source_node_id: str) -> list[Edge]:
        graph = self._graphs.get(graph_name)
        if graph is None:
            return []
        return [edge for edge in graph.edges if edge.source == source_node_id]

    def find_path(self, graph_name: str, start_node_id: str, end_node_id: str) -> list[Node]:
        """Shortest path of nodes between two node ids, or an empty list.

        Edges are followed from source to target, and also backwards when
        marked bidirectional.
        """
        graph = self._graphs.get(graph_name)
        if graph is None:
            return []

        queue: deque[list[str]] = deque([[start_node_id]])
        visited = {start_node_id}
        while queue:
            current_path = queue.popleft()
            current = current_path[-1]
            if current == end_node_id:
                found = (self.get_node_by_id(graph_name, node_id) for node_id in current_path)
                return [node for node in found if node is not None]

            for edge in graph.edges:
                if edge.source == current:
                    target = edge.target
                elif edge.conditions.is_bidirectional and edge.target == current:
                    target = edge.source
                else:
                    continue
                if target not in visited:
                    visited.add(target)
                    queue.append(current_path + [target])
        return []

    def settings(self) -> Settings:
        return self._settings

    # Edits

    def update_device(self, device_name: str, device: MotionDevice) -> None:
        if device_name not in self._devices:
            raise ConfigError(f"Device not found: {device_name}")
        updated = copy.deepcopy(device)
        updated.name = device_name
        self._devices[device_name] = updated

    def add_position(self, device_name: str, position_name: str, position: Position) -> None:
        device = self._devices.get(device_name)
        if device is None:
            raise ConfigError(f"Device not found: {device_name}")
        device.positions[position_name] = copy.copy(position)

    def add_device(self, device_name: str, device: MotionDevice) -> None:
        if device_name in self._devices:
            raise ConfigError(f"Device already exists: {device_name}")
        new_device = copy.deepcopy(device)
        new_device.name = device_name
        self._devices[device_name] = new_device

    def delete_device(self, device_name: str) -> bool:
        """Remove a device; False if unknown, ConfigError if a graph uses it."""
        if device_name not in self._devices:
            return False
        for graph_name, graph in sorted(self._graphs.items()):
            if any(node.device == device_name for node in graph.nodes):
                raise ConfigError(
                    f"Cannot delete device '{device_name}' because it is referenced "
                    f"in graph '{graph_name}'"
                )
        del self._devices[device_name]
        return True

    def delete_position(self, device_name: str, position_name: str) -> bool:
        """Remove a position; False if unknown, ConfigError if a graph uses it."""
        device = self._devices.get(device_name)
        if device is None or position_name not in device.positions:
            return False
        for graph_name, graph in sorted(self._graphs.items()):
            if any(
                node.device == device_name and node.position == position_name
                for node in graph.nodes
            ):
                raise ConfigError(
                    f"Cannot delete position '{position_name}' from device '{device_name}' "
                    f"because it is referenced in graph '{graph_name}'"
                )
        del device.positions[position_name]
        return True

    def update_settings(self, settings: Settings) -> None:
        self._settings = copy.copy(settings)

    def update_graph(self, graph_name: str, graph: Graph) -> None:
        if graph_name not in self._graphs:
            raise ConfigError(f"Graph not found: {graph_name}")
        self._graphs[graph_name] = copy.deepcopy(graph)

    # Persistence

    def _to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self._devices:
            result["MotionDevices"] = {
                name: device.to_dict() for name, device in self._devices.items()
            }
        if self._graphs:
            result["Graphs"] = {name: graph.to_dict() for name, graph in self._graphs.items()}
        result["Settings"] = self._settings.to_dict()
        return result

    def save_config(self, file_path: str | Path | None = None) -> bool:
        """Write the configuration as JSON; return whether it succeeded."""
        path = Path(file_path) if file_path else self._config_path
        try:
            text = json.dumps(self._to_dict(), indent=2, sort_keys=True)
            with open(path, "w", encoding="utf-8") as handle:
                handle.write(text)
        except (OSError, TypeError, ValueError) as exc:
            print(f"Error saving configuration: {exc}", file=sys.stderr)
            return False
        return True