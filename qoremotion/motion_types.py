"""Data types describing motion devices, positions, graphs and settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping


def _as_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{key!r} must be a boolean, got {type(value).__name__}")
    return value


def _as_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{key!r} must be a string, got {type(value).__name__}")
    return value


def _as_int(key: str, value: Any) -> int:
    if not isinstance(value, (int, float)):
        raise TypeError(f"{key!r} must be a number, got {type(value).__name__}")
    return int(value)


def _as_float(key: str, value: Any) -> float:
    if not isinstance(value, (int, float)):
        raise TypeError(f"{key!r} must be a number, got {type(value).__name__}")
    return float(value)


_Spec = tuple[tuple[str, str, Callable[[str, Any], Any]], ...]


def _read(data: Mapping[str, Any], spec: _Spec) -> dict[str, Any]:
    """Collect constructor arguments for the keys present in ``data``."""
    return {attr: convert(key, data[key]) for key, attr, convert in spec if key in data}


@dataclass
class Position:
    """Coordinates of a position on up to six axes."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    u: float = 0.0
    v: float = 0.0
    w: float = 0.0

    _SPEC = tuple((axis, axis, _as_float) for axis in "xyzuvw")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Position:
        return cls(**_read(data, cls._SPEC))

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z, "u": self.u, "v": self.v, "w": self.w}


@dataclass
class MotionDevice:
    """A motion controller and the named positions it knows."""

    is_enabled: bool = False
    ip_address: str = ""
    port: int = 0
    id: int = 0
    name: str = ""
    positions: dict[str, Position] = field(default_factory=dict)

    _SPEC = (
        ("IsEnabled", "is_enabled", _as_bool),
        ("IpAddress", "ip_address", _as_str),
        ("Port", "port", _as_int),
        ("Id", "id", _as_int),
    )

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> MotionDevice:
        device = cls(name=name, **_read(data, cls._SPEC))
        positions = data.get("Positions")
        if isinstance(positions, Mapping):
            device.positions = {
                pos_name: Position.from_dict(pos) for pos_name, pos in positions.items()
            }
        return device

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "IsEnabled": self.is_enabled,
            "IpAddress": self.ip_address,
            "Port": self.port,
            "Id": self.id,
            "Name": self.name,
        }
        if self.positions:
            result["Positions"] = {name: pos.to_dict() for name, pos in self.positions.items()}
        return result


@dataclass
class Node:
    """A graph node tying a device to one of its named positions."""

    id: str = ""
    label: str = ""
    device: str = ""
    position: str = ""
    x: int = 0
    y: int = 0

    _SPEC = (
        ("Id", "id", _as_str),
        ("Label", "label", _as_str),
        ("Device", "device", _as_str),
        ("Position", "position", _as_str),
        ("X", "x", _as_int),
        ("Y", "y", _as_int),
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Node:
        return cls(**_read(data, cls._SPEC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "Id": self.id,
            "Label": self.label,
            "Device": self.device,
            "Position": self.position,
            "X": self.x,
            "Y": self.y,
        }


@dataclass
class EdgeConditions:
    """Conditions attached to a transition between two nodes."""

    requires_operator_approval: bool = False
    timeout_seconds: int = 0
    is_bidirectional: bool = False

    _SPEC = (
        ("RequiresOperatorApproval", "requires_operator_approval", _as_bool),
        ("TimeoutSeconds", "timeout_seconds", _as_int),
        ("IsBidirectional", "is_bidirectional", _as_bool),
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EdgeConditions:
        return cls(**_read(data, cls._SPEC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "RequiresOperatorApproval": self.requires_operator_approval,
            "TimeoutSeconds": self.timeout_seconds,
            "IsBidirectional": self.is_bidirectional,
        }


@dataclass
class Edge:
    """A transition from a source node to a target node."""

    id: str = ""
    source: str = ""
    target: str = ""
    label: str = ""
    conditions: EdgeConditions = field(default_factory=EdgeConditions)

    _SPEC = (
        ("Id", "id", _as_str),
        ("Source", "source", _as_str),
        ("Target", "target", _as_str),
        ("Label", "label", _as_str),
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Edge:
        edge = cls(**_read(data, cls._SPEC))
        conditions = data.get("Conditions")
        if isinstance(conditions, Mapping):
            edge.conditions = EdgeConditions.from_dict(conditions)
        return edge

    def to_dict(self) -> dict[str, Any]:
        return {
            "Id": self.id,
            "Source": self.source,
            "Target": self.target,
            "Label": self.label,
            "Conditions": self.conditions.to_dict(),
        }


@dataclass
class Graph:
    """Nodes and the edges between them."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Graph:
        graph = cls()
        nodes = data.get("Nodes")
        if isinstance(nodes, list):
            graph.nodes = [Node.from_dict(node) for node in nodes]
        edges = data.get("Edges")
        if isinstance(edges, list):
            graph.edges = [Edge.from_dict(edge) for edge in edges]
        return graph

    def to_dict(self) -> dict[str, Any]:
        return {
            "Nodes": [node.to_dict() for node in self.nodes],
            "Edges": [edge.to_dict() for edge in self.edges],
        }


@dataclass
class Settings:
    """Global motion settings."""

    default_speed: float = 10.0
    default_acceleration: float = 5.0
    log_level: str = "info"
    auto_reconnect: bool = True
    connection_timeout: int = 5000
    position_tolerance: float = 0.001

    _SPEC = (
        ("DefaultSpeed", "default_speed", _as_float),
        ("DefaultAcceleration", "default_acceleration", _as_float),
        ("LogLevel", "log_level", _as_str),
        ("AutoReconnect", "auto_reconnect", _as_bool),
        ("ConnectionTimeout", "connection_timeout", _as_int),
        ("PositionTolerance", "position_tolerance", _as_float),
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Settings:
        return cls(**_read(data, cls._SPEC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "DefaultSpeed": self.default_speed,
            "DefaultAcceleration": self.default_acceleration,
            "LogLevel": self.log_level,
            "AutoReconnect": self.auto_reconnect,
            "ConnectionTimeout": self.connection_timeout,
            "PositionTolerance": self.position_tolerance,
        }