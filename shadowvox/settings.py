"""
Mesh Settings

----

Copyright 2021 - Cole Brauer, Dan Aukes
"""

import os

from shadowvox.surface import DEFAULT_RESOLUTION, DEFAULT_WALL_THICKNESS

# Default voxel edge length in mm
DEFAULT_VOXEL_SIZE = 1.0

class MeshSettings:
    """
    Object to store meshing settings.

    After initializing and configuring the settings, use applySettings() to
    apply them. Changes will only persist for the current Python session.

    For persistent settings, configure these environment variables:

    ``SV_RESOLUTION = <fixed-point units per voxel>``

    ``SV_WALL_THICKNESS = <wall thickness in fixed-point units>``

    ``SV_VOXEL_SIZE = <voxel edge length in mm>``

    ----

    Example:

    ``settings = MeshSettings()``

    ``settings.setWallThickness(20)``

    ``settings.applySettings()``

    ----
    """
    def __init__(self):
        """
        Initialize a MeshSettings object.
        """
        self.resolution = readEnvironment('SV_RESOLUTION', int, DEFAULT_RESOLUTION)
        self.wall_thickness = readEnvironment('SV_WALL_THICKNESS', int, DEFAULT_WALL_THICKNESS)
        self.voxel_size = readEnvironment('SV_VOXEL_SIZE', float, DEFAULT_VOXEL_SIZE)

    def setResolution(self, resolution: int = DEFAULT_RESOLUTION):
        self.resolution = resolution

    def setWallThickness(self, wall_thickness: int = DEFAULT_WALL_THICKNESS):
        self.wall_thickness = wall_thickness

    def setVoxelSize(self, voxel_size: float = DEFAULT_VOXEL_SIZE):
        """
        Set the voxel edge length.

        Args:
            voxel_size: Voxel edge length in mm

        Returns:
            None
        """
        self.voxel_size = voxel_size

    def getScale(self):
        """
        Get the output scale.

        Returns:
            mm per fixed-point unit
        """
        return self.voxel_size / self.resolution

    def validate(self):
        """
        Check that the settings describe a printable part.

        Returns:
            None
        """
        checkMeshParameters(self.resolution, self.wall_thickness)
        if self.voxel_size <= 0:
            raise ValueError('Voxel size must be positive, got ' + str(self.voxel_size))

    def applySettings(self):
        """
        Apply mesh settings as overrides.

        These changes will only persist for the current python session.

        Returns:
            None
        """
        os.environ['SV_RESOLUTION'] = str(self.resolution)
        os.environ['SV_WALL_THICKNESS'] = str(self.wall_thickness)
        os.environ['SV_VOXEL_SIZE'] = str(self.voxel_size)

# Helper functions ##############################################################
def readEnvironment(name: str, value_type, default):
    """
    Read a setting from an environment variable.

    Args:
        name: Variable name
        value_type: Type to convert the value to
        default: Value to use if the variable is not set

    Returns:
        Setting value
    """
    try:
        return value_type(os.environ.get(name))
    except TypeError:
        return default
    except ValueError:
        raise ValueError('Invalid value for ' + name + ': ' + repr(os.environ.get(name)))

def checkMeshParameters(resolution: int, wall_thickness: int):
    """
    Check the resolution and wall thickness used for surface extraction.

    Args:
        resolution: Fixed-point units per voxel
        wall_thickness: Wall thickness in fixed-point units

    Returns:
        None
    """
    if resolution <= 0:
        raise ValueError('Resolution must be positive, got ' + str(resolution))
    if wall_thickness <= 0:
        raise ValueError('Wall thickness must be positive, got ' + str(wall_thickness))
    if 2 * wall_thickness >= resolution:
        raise ValueError('Wall thickness ' + str(wall_thickness) + ' must be less than half the resolution (' + str(resolution) + ')')
