import struct

import meshio
import numpy as np
import pytest

from shadowvox import VoxelGrid, SOLID, SURFACE_Y, SURFACE_Z, extractSurface, writeBinaryStl, readBinaryStl


def test_empty_stl():
    data = writeBinaryStl(np.zeros((0, 3, 3), dtype=np.int64), 0.001)
    assert len(data) == 84
    assert data[:80] == bytes(80)
    assert struct.unpack('<I', data[80:84])[0] == 0


def test_record_layout():
    tris = np.array([[[0, 0, 0], [1000, 0, 0], [0, 2000, 500]]], dtype=np.int64)
    data = writeBinaryStl(tris, 0.001)

    assert len(data) == 84 + 50
    assert struct.unpack('<I', data[80:84])[0] == 1

    values = struct.unpack('<12fH', data[84:134])
    assert values[0:3] == (0.0, 0.0, 0.0)
    assert values[3:12] == (0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 2.0, 0.5)
    assert values[12] == 0


def test_vertices_are_scaled_float32():
    tris = extractSurface(VoxelGrid.fromFlags(1, 1, 1, [SURFACE_Y | SURFACE_Z]), 1000, 10)
    scale = 0.7 / 1000
    data = writeBinaryStl(tris, scale)

    assert len(data) == 84 + 50 * len(tris)
    assert struct.unpack('<I', data[80:84])[0] == len(tris)

    verts = readBinaryStl(data)
    assert verts.shape == tris.shape
    assert np.array_equal(verts, (tris * scale).astype(np.float32))


def test_normals_and_attributes_are_zero():
    tris = extractSurface(VoxelGrid.fromFlags(1, 1, 1, [SOLID]), 10, 1)
    data = writeBinaryStl(tris, 1.0)
    for i in range(len(tris)):
        record = data[84 + 50 * i:84 + 50 * (i + 1)]
        assert record[:12] == bytes(12)
        assert record[48:50] == bytes(2)


def test_read_rejects_bad_data():
    with pytest.raises(ValueError):
        readBinaryStl(bytes(40))

    data = writeBinaryStl(np.ones((2, 3, 3)), 1.0)
    with pytest.raises(ValueError):
        readBinaryStl(data[:-1])
    with pytest.raises(ValueError):
        readBinaryStl(data + bytes(50))


def test_meshio_reads_output(tmp_path):
    tris = extractSurface(VoxelGrid.fromOccupancy(np.ones((2, 1, 1))), 1000, 10)
    filename = str(tmp_path / 'bar.stl')
    with open(filename, 'wb') as f:
        f.write(writeBinaryStl(tris, 0.002))

    mesh = meshio.read(filename)

    assert len(mesh.cells_dict['triangle']) == len(tris)
    assert np.allclose(mesh.points.min(axis=0), [0, 0, 0])
    assert np.allclose(mesh.points.max(axis=0), [4, 2, 2])
