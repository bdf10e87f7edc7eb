import struct

import numpy as np
import pytest

from shadowvox import VoxelGrid, Mesh, MeshSettings, SOLID, SURFACE_X, gridToBinaryStl, readBinaryStl


@pytest.fixture
def settings(monkeypatch):
    for name in ('SV_RESOLUTION', 'SV_WALL_THICKNESS', 'SV_VOXEL_SIZE'):
        monkeypatch.delenv(name, raising=False)
    return MeshSettings()


def test_mesh_from_grid():
    mesh = Mesh.fromVoxelGrid(VoxelGrid.fromOccupancy(np.ones((2, 2, 2))), 10, 1)
    assert len(mesh) == 48
    assert mesh.getTriangleCount() == 48
    assert mesh.getBounds() == ((0, 0, 0), (20, 20, 20))
    assert mesh.getVolume() == 8000


def test_mesh_rejects_bad_wall_thickness():
    grid = VoxelGrid.fromFlags(1, 1, 1, [SOLID])
    with pytest.raises(ValueError):
        Mesh.fromVoxelGrid(grid, 10, 5)
    with pytest.raises(ValueError):
        Mesh.fromVoxelGrid(grid, 10, 0)


def test_empty_mesh():
    mesh = Mesh.fromVoxelGrid(VoxelGrid.empty((2, 2, 2)))
    assert len(mesh) == 0
    assert mesh.getBounds() == ((0, 0, 0), (0, 0, 0))
    assert mesh.getVolume() == 0
    assert len(mesh.toBytes()) == 84


def test_copy_is_independent():
    mesh = Mesh.fromVoxelGrid(VoxelGrid.fromFlags(1, 1, 1, [SOLID]), 10, 1)
    mesh_copy = Mesh.copy(mesh)
    mesh_copy.tris[0, 0, 0] = 99
    assert mesh.tris[0, 0, 0] != 99
    assert mesh_copy.res == mesh.res


def test_default_scale_is_one_voxel_per_mm():
    mesh = Mesh.fromVoxelGrid(VoxelGrid.fromFlags(1, 1, 1, [SOLID]), 1000, 10)
    verts = readBinaryStl(mesh.toBytes())
    assert verts.min() == 0.0
    assert verts.max() == 1.0


def test_export(tmp_path, capsys):
    mesh = Mesh.fromVoxelGrid(VoxelGrid.fromFlags(1, 1, 1, [SOLID]), 1000, 10)
    filename = str(tmp_path / 'voxel.stl')
    mesh.export(filename, 2.0)

    assert 'Saving file: ' + filename in capsys.readouterr().out
    with open(filename, 'rb') as f:
        data = f.read()
    assert len(data) == 84 + 50 * 12
    assert readBinaryStl(data).max() == 2.0


def test_export_empty_mesh_warns(tmp_path, capsys):
    mesh = Mesh(np.zeros((0, 3, 3)))
    mesh.export(str(tmp_path / 'empty.stl'))
    assert 'WARNING' in capsys.readouterr().out


def test_grid_to_stl(settings):
    grid = VoxelGrid.fromFlags(1, 1, 1, [SOLID])
    data = gridToBinaryStl(grid, settings)
    assert len(data) == 84 + 50 * 12
    assert struct.unpack('<I', data[80:84])[0] == 12
    assert readBinaryStl(data).max() == pytest.approx(1.0)


def test_grid_to_stl_removes_floating_voxels(settings):
    grid = VoxelGrid.fromFlags(4, 1, 1, [SOLID, SOLID, 0, SOLID])
    data = gridToBinaryStl(grid, settings)
    assert struct.unpack('<I', data[80:84])[0] == 20
    assert grid.isEmpty(3, 0, 0)


def test_grid_to_stl_without_trim(settings):
    grid = VoxelGrid.fromFlags(4, 1, 1, [SOLID, SOLID, 0, SOLID])
    data = gridToBinaryStl(grid, settings, trim=False)
    assert struct.unpack('<I', data[80:84])[0] == 32
    assert grid.countActive() == 3


def test_grid_to_stl_empty_grid(settings):
    data = gridToBinaryStl(VoxelGrid.empty((3, 3, 3)), settings)
    assert data == bytes(84)


def test_grid_to_stl_rejects_zero_size(settings):
    with pytest.raises(ValueError):
        gridToBinaryStl(VoxelGrid.empty((0, 4, 4)), settings)


def test_grid_to_stl_rejects_bad_settings(settings):
    grid = VoxelGrid.fromFlags(1, 1, 1, [SURFACE_X])
    settings.setWallThickness(600)
    with pytest.raises(ValueError):
        gridToBinaryStl(grid, settings)
    assert grid.countActive() == 1


def test_grid_to_stl_uses_voxel_size(settings):
    settings.setVoxelSize(0.25)
    data = gridToBinaryStl(VoxelGrid.fromOccupancy(np.ones((2, 1, 1))), settings)
    assert readBinaryStl(data).max() == pytest.approx(0.5)
