from __future__ import annotations

import numpy as np
import pytest

from dot3d_scripts import dot3d as engine
from dot3d_scripts import dot3d_model
from dot3d_scripts.dot3d_model import Model


def test_child_inherits_parent_position() -> None:
    parent = engine.spawnEmpty("parent", 1.0, 2.0, 3.0, [])
    child = engine.spawnEmpty("child", 0.0, 0.0, 0.0, [])
    child.setParent(parent)
    child.set_local_position(0.0, 0.0, 1.0)

    assert np.allclose(child.get_position(), [1.0, 2.0, 4.0])
    assert child.childLevel == 1
    assert child in parent.children


def test_parent_yaw_turns_child_offset_and_forward() -> None:
    parent = engine.spawnEmpty("parent", 1.0, 0.0, 0.0, [])
    parent.set_local_yaw(90.0)
    child = engine.spawnEmpty("child", 0.0, 0.0, 0.0, [])
    child.setParent(parent)
    child.set_local_position(0.0, 0.0, 1.0)

    assert np.allclose(child.get_position(), [2.0, 0.0, 0.0], atol=1e-12)
    assert np.allclose(child.get_forward(), [1.0, 0.0, 0.0], atol=1e-12)


def test_parent_scale_scales_child_offset() -> None:
    parent = engine.spawnEmpty("parent", 0.0, 0.0, 0.0, [])
    parent.set_scale(2.0, 2.0, 2.0)
    child = engine.spawnEmpty("child", 0.0, 0.0, 0.0, [])
    child.setParent(parent)
    child.set_local_position(1.0, 0.0, 0.0)

    assert np.allclose(child.get_position(), [2.0, 0.0, 0.0])
    assert np.allclose(child.worldTransform.scale, [2.0, 2.0, 2.0])


def test_moving_parent_moves_grandchild() -> None:
    root = engine.spawnEmpty("root", 0.0, 0.0, 0.0, [])
    group = engine.spawnEmpty("group", 0.0, 0.0, 0.0, [])
    group.setParent(root)
    leaf = engine.spawnEmpty("leaf", 0.0, 0.0, 0.0, [])
    leaf.setParent(group)
    leaf.set_local_position(0.0, 1.0, 0.0)

    root.set_local_position(5.0, 0.0, 0.0)

    assert leaf.childLevel == 2
    assert np.allclose(leaf.get_position(), [5.0, 1.0, 0.0])


def test_add_position_vector_is_in_world_space() -> None:
    parent = engine.spawnEmpty("parent", 0.0, 0.0, 0.0, [])
    parent.set_local_yaw(90.0)
    child = engine.spawnEmpty("child", 0.0, 0.0, 0.0, [])
    child.setParent(parent)

    child.add_position_vector(np.array([1.0, 0.0, 0.0]))

    assert np.allclose(child.get_position(), [1.0, 0.0, 0.0], atol=1e-12)
    assert np.allclose(child.localTransform.position, [0.0, 0.0, 1.0], atol=1e-12)


def test_unparenting_keeps_local_values_as_world() -> None:
    parent = engine.spawnEmpty("parent", 3.0, 0.0, 0.0, [])
    child = engine.spawnEmpty("child", 0.0, 0.0, 0.0, [])
    child.setParent(parent)
    child.set_local_position(1.0, 0.0, 0.0)

    child.setParent(None)

    assert child.parent is None
    assert child.childLevel == 0
    assert child not in parent.children
    assert np.allclose(child.get_position(), [1.0, 0.0, 0.0])


def test_registry_is_sorted_parents_first() -> None:
    child = engine.spawnEmpty("child", 0.0, 0.0, 0.0, [])
    parent = engine.spawnEmpty("parent", 0.0, 0.0, 0.0, [])
    child.setParent(parent)

    assert Model._registry.index(parent) < Model._registry.index(child)


def test_euler_yaw_is_reported_wrapped() -> None:
    obj = engine.spawnEmpty("obj", 0.0, 0.0, 0.0, [])
    obj.set_local_yaw(-90.0)

    assert obj.get_local_yaw() == 270.0
    assert np.allclose(obj.get_forward(), [-1.0, 0.0, 0.0], atol=1e-12)


def test_set_world_yaw_cancels_parent_yaw_and_keeps_pitch() -> None:
    parent = engine.spawnEmpty("parent", 0.0, 0.0, 0.0, [])
    parent.set_local_yaw(30.5)
    label = engine.spawnEmpty("label", 0.0, 0.0, 0.0, [])
    label.setParent(parent)
    label.set_local_euler(90.0, 0.0, 0.0)

    label.set_world_yaw(0.0)

    assert abs(((label.get_world_yaw() + 180.0) % 360.0) - 180.0) < 1e-9
    assert np.allclose(label.get_forward(), [0.0, -1.0, 0.0], atol=1e-9)
    assert np.allclose(label.get_up(), [0.0, 0.0, 1.0], atol=1e-9)


def test_sphere_mesh_points_sit_on_the_surface() -> None:
    points, triangles = dot3d_model.sphere_mesh(0.5, 6, 8)

    assert points.shape == (2 + 5 * 8, 9)
    assert triangles.shape == (8 + 2 * 8 * 4 + 8, 3)
    assert np.allclose(np.linalg.norm(points[:, 0:3], axis=1), 0.5)
    assert triangles.min() == 0
    assert triangles.max() == len(points) - 1


def test_cube_mesh_is_a_unit_cube() -> None:
    points, triangles = dot3d_model.cube_mesh()

    assert points.shape == (8, 9)
    assert triangles.shape == (12, 3)
    assert np.allclose(np.abs(points[:, 0:3]), 0.5)


def test_transform_points_applies_scale_rotation_position() -> None:
    cube = engine.spawnCube("cube", 1.0, 0.0, 0.0, [], engine.Color.WHITE)
    cube.set_scale(2.0, 1.0, 1.0)
    cube.set_local_yaw(90.0)

    points = cube.transform_points()

    # the +x face (scaled to 1 from the center) now points down -z
    corner = points[7]  # (0.5, 0.5, 0.5) in the mesh
    assert np.allclose(corner[3:6], [1.0 + 0.5, 0.5, -1.0], atol=1e-12)


@pytest.mark.parametrize("tag, expected", [("probe", True), ("text", False)])
def test_tags(tag: str, expected: bool) -> None:
    obj = engine.spawnEmpty("obj", 0.0, 0.0, 0.0, ["probe"])
    obj.add_tag("probe")
    assert obj.tags.count("probe") == 1
    assert obj.hasTag(tag) is expected
