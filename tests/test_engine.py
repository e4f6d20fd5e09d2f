from __future__ import annotations

import logging

import numpy as np

from dot3d_scripts import dot3d as engine
from dot3d_scripts import dot3d_logging
from dot3d_scripts.dot3d_model import Model


def test_names_are_made_unique() -> None:
    first = engine.spawnEmpty("thing", 0.0, 0.0, 0.0, [])
    second = engine.spawnEmpty("thing", 0.0, 0.0, 0.0, [])
    third = engine.spawnEmpty("thing", 0.0, 0.0, 0.0, [])

    assert [first.name, second.name, third.name] == ["thing", "thing(1)", "thing(2)"]
    assert engine.getObject("thing(1)") is second


def test_get_object_unknown_name_is_none() -> None:
    assert engine.getObject("nothing here") is None


def test_get_objects_with_tag() -> None:
    engine.spawnEmpty("a", 0.0, 0.0, 0.0, ["probe"])
    engine.spawnEmpty("b", 0.0, 0.0, 0.0, [])
    label = engine.spawnText("c", "hi", None, 0.0, 0.0, 0.0, [], engine.Color.WHITE, 500, "middle left")

    assert [i.name for i in engine.getObjectsWithTag("probe")] == ["a"]
    assert engine.getObjectsWithTag("text") == [label]
    assert label.anchor == "middle left"


def test_spawning_does_not_change_the_tags_passed_in() -> None:
    tags = ["label"]
    label = engine.spawnText("c", "hi", None, 0.0, 0.0, 0.0, tags, engine.Color.WHITE, 500, "middle left")

    assert tags == ["label"]
    assert label.tags == ["label", "text"]


def test_unknown_anchor_falls_back_to_center() -> None:
    label = engine.spawnText("c", "hi", None, 0.0, 0.0, 0.0, [], engine.Color.WHITE, 500, "bottom right")
    assert label.anchor == "middle center"


def test_destroy_object_unparents_children_and_camera() -> None:
    parent = engine.spawnEmpty("parent", 0.0, 0.0, 0.0, [])
    child = engine.spawnEmpty("child", 0.0, 0.0, 0.0, [])
    child.setParent(parent)
    engine.parentCamera(parent, 0.0, 1.0, 0.0)

    engine.destroyObjectWithName("parent")

    assert engine.getObject("parent") is None
    assert child.parent is None
    assert engine.cameraParent is None


def test_destroy_all_objects_empties_the_registry() -> None:
    root = engine.spawnEmpty("root", 0.0, 0.0, 0.0, [])
    for i in range(3):
        engine.spawnSphere("ball", float(i), 0.0, 0.0, [], engine.Color.RED).setParent(root)

    engine.destroyAllObjects()

    assert Model._registry == []


def test_camera_follows_its_parent() -> None:
    holder = engine.spawnEmpty("holder", 0.0, 9.0, 0.0, [])
    holder.set_local_euler(90.0, 0.0, 0.0)
    engine.parentCamera(holder, 0.0, 0.0, 0.0)

    camera = engine.refreshCameraTransform()

    assert np.allclose(camera.position, [0.0, 9.0, 0.0])
    assert np.allclose(camera.forward, [0.0, -1.0, 0.0], atol=1e-12)
    assert np.allclose(camera.up, [0.0, 0.0, 1.0], atol=1e-12)


def test_first_update_has_no_delta_time() -> None:
    engine.hasClockStarted = False

    assert engine.update() == 0
    assert engine.update() >= 0


def test_unknown_modes_are_ignored_with_a_warning(render_config, caplog) -> None:
    with caplog.at_level(logging.WARNING):
        engine.setRenderingMode("raytraced")
        engine.setBackgroundMode("skybox")
        engine.setProjection("fisheye")

    assert render_config.renderingMode == "shaded"
    assert render_config.backgroundMode == "solid color"
    assert render_config.projection == "orthographic"
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 3


def test_camera_settings_reach_the_renderer(render_config) -> None:
    engine.setProjection("perspective")
    engine.setOrthographicSize(3.0)

    assert render_config.projection == "perspective"
    assert render_config.orthographicSize == 3.0

    engine.setProjection("orthographic")
    engine.setOrthographicSize(5.0)


def test_setup_default_logging_only_configures_once(monkeypatch) -> None:
    calls = []
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    assert dot3d_logging.setup_default_logging("debug") is True
    assert calls[0]["level"] == logging.DEBUG

    monkeypatch.setattr(root, "handlers", [logging.NullHandler()])
    assert dot3d_logging.setup_default_logging() is False
    assert len(calls) == 1
