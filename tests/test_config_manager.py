import json

import pytest

from qoremotion.config_manager import ConfigError, MotionConfigManager
from qoremotion.motion_types import Edge, EdgeConditions, Graph, MotionDevice, Node, Position, Settings

SAMPLE = {
    "MotionDevices": {
        "hex-left": {
            "IsEnabled": True,
            "IpAddress": "192.168.0.10",
            "Port": 50000,
            "Id": 1,
            "Positions": {
                "home": {"x": 1.5, "y": 2.0, "z": 3.0},
                "load": {"x": 10.0},
            },
        },
        "gantry": {
            "IsEnabled": False,
            "IpAddress": "192.168.0.20",
            "Port": 701,
            "Id": 2,
            "Positions": {"park": {"z": 4.0}},
        },
    },
    "Graphs": {
        "Process": {
            "Nodes": [
                {"Id": "n1", "Label": "Start", "Device": "hex-left", "Position": "home", "X": 1, "Y": 2},
                {"Id": "n2", "Label": "Load", "Device": "hex-left", "Position": "load"},
                {"Id": "n3", "Label": "Park", "Device": "gantry", "Position": "park"},
                {"Id": "n4", "Label": "Island", "Device": "gantry", "Position": "park"},
            ],
            "Edges": [
                {"Id": "e1", "Source": "n1", "Target": "n2", "Label": "a"},
                {
                    "Id": "e2",
                    "Source": "n3",
                    "Target": "n2",
                    "Label": "b",
                    "Conditions": {"IsBidirectional": True, "TimeoutSeconds": 30},
                },
            ],
        }
    },
    "Settings": {"DefaultSpeed": 20.0, "LogLevel": "debug"},
}


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(SAMPLE), encoding="utf-8")
    return path


@pytest.fixture
def manager(config_file):
    return MotionConfigManager(config_file)


def test_devices_loaded_sorted_by_name(manager):
    assert list(manager.devices()) == ["gantry", "hex-left"]
    device = manager.get_device("hex-left")
    assert device.name == "hex-left"
    assert device.port == 50000
    assert device.is_enabled is True


def test_unknown_device_is_none(manager):
    assert manager.get_device("missing") is None
    assert manager.get_device_positions("missing") is None
    assert manager.get_named_position("missing", "home") is None


def test_enabled_devices(manager):
    assert list(manager.enabled_devices()) == ["hex-left"]


def test_named_position(manager):
    assert manager.get_named_position("hex-left", "home") == Position(x=1.5, y=2.0, z=3.0)
    assert manager.get_named_position("hex-left", "nowhere") is None
    assert list(manager.get_device_positions("hex-left")) == ["home", "load"]


def test_settings_loaded_with_defaults_for_missing(manager):
    settings = manager.settings()
    assert settings.default_speed == 20.0
    assert settings.log_level == "debug"
    assert settings.default_acceleration == Settings().default_acceleration


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        MotionConfigManager(tmp_path / "absent.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        MotionConfigManager(path)


def test_no_devices_is_invalid(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text(json.dumps({"Settings": {}}), encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid configuration format"):
        MotionConfigManager(path)


def test_wrong_type_raises(tmp_path):
    path = tmp_path / "typed.json"
    path.write_text(json.dumps({"MotionDevices": {"d": {"Port": "abc"}}}), encoding="utf-8")
    with pytest.raises(ConfigError):
        MotionConfigManager(path)


def test_graph_queries(manager):
    assert list(manager.graphs()) == ["Process"]
    assert manager.get_graph("Other") is None
    assert manager.get_node_by_id("Process", "n3").label == "Park"
    assert manager.get_node_by_id("Process", "zz") is None
    assert manager.get_node_by_id("Other", "n1") is None
    assert [n.id for n in manager.get_nodes_by_device("Process", "gantry")] == ["n3", "n4"]
    assert [e.id for e in manager.get_edges_by_source("Process", "n1")] == ["e1"]
    assert manager.get_edges_by_source("Other", "n1") == []


def test_edge_conditions_loaded(manager):
    edge = manager.get_edges_by_source("Process", "n3")[0]
    assert edge.conditions == EdgeConditions(timeout_seconds=30, is_bidirectional=True)


def test_find_path_directed(manager):
    assert [n.id for n in manager.find_path("Process", "n1", "n2")] == ["n1", "n2"]
    # e1 is not bidirectional, so n2 cannot reach n1
    assert manager.find_path("Process", "n2", "n1") == []


def test_find_path_through_bidirectional_edge(manager):
    assert [n.id for n in manager.find_path("Process", "n1", "n3")] == ["n1", "n2", "n3"]


def test_find_path_same_node_and_unreachable(manager):
    assert [n.id for n in manager.find_path("Process", "n4", "n4")] == ["n4"]
    assert manager.find_path("Process", "n1", "n4") == []
    assert manager.find_path("Other", "n1", "n2") == []


def test_update_device_keeps_name(manager):
    manager.update_device("gantry", MotionDevice(is_enabled=True, name="renamed", port=9))
    device = manager.get_device("gantry")
    assert device.name == "gantry"
    assert device.port == 9
    assert list(manager.enabled_devices()) == ["gantry", "hex-left"]


def test_update_unknown_device_raises(manager):
    with pytest.raises(ConfigError, match="Device not found"):
        manager.update_device("missing", MotionDevice())


def test_add_position(manager):
    manager.add_position("gantry", "new", Position(u=7.0))
    assert manager.get_named_position("gantry", "new") == Position(u=7.0)
    with pytest.raises(ConfigError):
        manager.add_position("missing", "new", Position())


def test_add_device(manager):
    manager.add_device("stage", MotionDevice(ip_address="10.0.0.1", name="other"))
    assert manager.get_device("stage").name == "stage"
    with pytest.raises(ConfigError, match="Device already exists"):
        manager.add_device("stage", MotionDevice())


def test_delete_device(manager):
    manager.add_device("spare", MotionDevice())
    assert manager.delete_device("spare") is True
    assert manager.get_device("spare") is None
    assert manager.delete_device("spare") is False


def test_delete_referenced_device_raises(manager):
    with pytest.raises(ConfigError, match="referenced in graph 'Process'"):
        manager.delete_device("gantry")
    assert manager.get_device("gantry").name == "gantry"


def test_delete_position(manager):
    manager.add_position("gantry", "spare", Position())
    assert manager.delete_position("gantry", "spare") is True
    assert manager.delete_position("gantry", "spare") is False
    assert manager.delete_position("missing", "park") is False
    with pytest.raises(ConfigError):
        manager.delete_position("gantry", "park")


def test_update_settings(manager):
    manager.update_settings(Settings(default_speed=1.0))
    assert manager.settings() == Settings(default_speed=1.0)


def test_update_graph(manager):
    graph = Graph(nodes=[Node(id="a"), Node(id="b")], edges=[Edge(id="x", source="a", target="b")])
    manager.update_graph("Process", graph)
    assert [n.id for n in manager.find_path("Process", "a", "b")] == ["a", "b"]
    with pytest.raises(ConfigError, match="Graph not found"):
        manager.update_graph("Other", graph)


def test_save_round_trip(manager, tmp_path):
    out = tmp_path / "saved.json"
    manager.add_position("gantry", "new", Position(v=2.5))
    assert manager.save_config(out) is True
    reloaded = MotionConfigManager(out)
    assert reloaded.devices() == manager.devices()
    assert reloaded.graphs() == manager.graphs()
    assert reloaded.settings() == manager.settings()


def test_save_writes_name_and_full_conditions(manager, tmp_path):
    out = tmp_path / "saved.json"
    manager.save_config(out)
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["MotionDevices"]["gantry"]["Name"] == "gantry"
    assert data["Graphs"]["Process"]["Edges"][0]["Conditions"] == {
        "IsBidirectional": False,
        "RequiresOperatorApproval": False,
        "TimeoutSeconds": 0,
    }


def test_save_defaults_to_loaded_path(manager, config_file):
    manager.add_device("stage", MotionDevice())
    assert manager.save_config() is True
    assert "stage" in MotionConfigManager(config_file).devices()


def test_save_to_directory_fails(manager, tmp_path):
    assert manager.save_config(tmp_path) is False