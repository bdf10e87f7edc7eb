import os

import pytest

from shadowvox import MeshSettings, DEFAULT_RESOLUTION, DEFAULT_WALL_THICKNESS


@pytest.fixture
def clean_environment(monkeypatch):
    for name in ('SV_RESOLUTION', 'SV_WALL_THICKNESS', 'SV_VOXEL_SIZE'):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_environment):
    settings = MeshSettings()
    assert settings.resolution == DEFAULT_RESOLUTION == 1000
    assert settings.wall_thickness == DEFAULT_WALL_THICKNESS == 10
    assert settings.voxel_size == 1.0
    assert settings.getScale() == pytest.approx(0.001)
    settings.validate()


def test_environment_overrides(clean_environment):
    clean_environment.setenv('SV_RESOLUTION', '200')
    clean_environment.setenv('SV_VOXEL_SIZE', '2.5')
    settings = MeshSettings()
    assert settings.resolution == 200
    assert settings.wall_thickness == DEFAULT_WALL_THICKNESS
    assert settings.voxel_size == 2.5
    assert settings.getScale() == pytest.approx(2.5 / 200)


def test_apply_settings(clean_environment):
    clean_environment.setenv('SV_RESOLUTION', '1000')
    clean_environment.setenv('SV_WALL_THICKNESS', '10')
    clean_environment.setenv('SV_VOXEL_SIZE', '1.0')

    settings = MeshSettings()
    settings.setResolution(500)
    settings.setWallThickness(25)
    settings.setVoxelSize(0.5)
    settings.applySettings()

    assert os.environ['SV_RESOLUTION'] == '500'
    assert os.environ['SV_WALL_THICKNESS'] == '25'
    assert os.environ['SV_VOXEL_SIZE'] == '0.5'

    reloaded = MeshSettings()
    assert (reloaded.resolution, reloaded.wall_thickness, reloaded.voxel_size) == (500, 25, 0.5)


@pytest.mark.parametrize('resolution, wall_thickness, voxel_size', [
    (0, 10, 1.0),
    (1000, 0, 1.0),
    (1000, -5, 1.0),
    (10, 5, 1.0),
    (10, 7, 1.0),
    (1000, 10, 0.0),
    (1000, 10, -1.0),
])
def test_invalid_settings(clean_environment, resolution, wall_thickness, voxel_size):
    settings = MeshSettings()
    settings.setResolution(resolution)
    settings.setWallThickness(wall_thickness)
    settings.setVoxelSize(voxel_size)
    with pytest.raises(ValueError):
        settings.validate()


def test_thin_wall_is_valid(clean_environment):
    settings = MeshSettings()
    settings.setResolution(10)
    settings.setWallThickness(4)
    settings.validate()


@pytest.mark.parametrize('name, value', [
    ('SV_RESOLUTION', '1e3'),
    ('SV_RESOLUTION', ''),
    ('SV_WALL_THICKNESS', 'thin'),
    ('SV_VOXEL_SIZE', 'large'),
])
def test_invalid_environment_value_names_variable(clean_environment, name, value):
    clean_environment.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        MeshSettings()
