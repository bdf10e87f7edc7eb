"""
Mesh Class

Initialized from a voxel grid

----

Copyright 2021 - Cole Brauer, Dan Aukes
"""

import numpy as np

from shadowvox.voxel_grid import VoxelGrid
from shadowvox.components import keepLargestComponent
from shadowvox.surface import extractSurface, DEFAULT_RESOLUTION, DEFAULT_WALL_THICKNESS
from shadowvox.stl import writeBinaryStl
from shadowvox.settings import MeshSettings, checkMeshParameters

class Mesh:
    """
    Triangle mesh that can be exported as a binary STL file.
    """

    def __init__(self, triangles: np.ndarray, resolution: int = DEFAULT_RESOLUTION):
        """
        Initialize a Mesh object.

        Args:
            triangles: Triangle array with shape (n, 3, 3) in fixed-point units
            resolution: Fixed-point units per voxel
        """
        self.tris = np.asarray(triangles, dtype=np.int64).reshape(-1, 3, 3)
        self.res = resolution

    @classmethod
    def fromVoxelGrid(cls, grid: VoxelGrid, resolution: int = DEFAULT_RESOLUTION, wall_thickness: int = DEFAULT_WALL_THICKNESS):
        """
        Generate a mesh from the surfaces of a voxel grid.

        ----

        Example:

        ``mesh1 = Mesh.fromVoxelGrid(grid)``

        ----

        Args:
            grid: VoxelGrid object
            resolution: Fixed-point units per voxel
            wall_thickness: Lattice wall thickness in fixed-point units

        Returns:
            Mesh
        """
        checkMeshParameters(resolution, wall_thickness)
        return cls(extractSurface(grid, resolution, wall_thickness), resolution)

    @classmethod
    def copy(cls, mesh):
        """
        Initialize a Mesh that is a copy of another mesh.

        Args:
            mesh: Reference Mesh object

        Returns:
            Mesh
        """
        return cls(mesh.tris.copy(), mesh.res)

    def __len__(self):
        return len(self.tris)

    def getTriangleCount(self):
        return len(self.tris)

    def getBounds(self):
        """
        Get the bounding box of the mesh.

        Returns:
            (min_x, min_y, min_z), (max_x, max_y, max_z) in fixed-point units
        """
        if len(self.tris) == 0:
            return (0, 0, 0), (0, 0, 0)

        points = self.tris.reshape(-1, 3)
        return tuple(int(v) for v in points.min(axis=0)), tuple(int(v) for v in points.max(axis=0))

    def getVolume(self):
        """
        Get the enclosed volume of the mesh.

        The mesh must be closed. The result is positive if the faces point
        outward.

        Returns:
            Volume in cubic fixed-point units
        """
        p0 = self.tris[:, 0, :]
        p1 = self.tris[:, 1, :]
        p2 = self.tris[:, 2, :]
        return int(np.sum(p0 * np.cross(p1, p2))) / 6

    def toBytes(self, scale: float = None):
        """
        Encode the mesh as a binary STL file.

        Args:
            scale: Output units per fixed-point unit, defaults to one voxel per mm

        Returns:
            File contents as bytes
        """
        if scale is None:
            scale = 1.0 / self.res

        return writeBinaryStl(self.tris, scale)

    def export(self, filename: str, voxel_size: float = 1.0):
        """
        Save the mesh as a binary STL file.

        ----

        Example:

        ``mesh1.export('result.stl', 0.5)``

        ----

        Args:
            filename: File name with extension
            voxel_size: Voxel edge length in mm

        Returns:
            None
        """
        print('Saving file: ' + filename)
        if len(self.tris) == 0:
            print('WARNING: Mesh has no triangles')

        with open(filename, 'wb') as f:
            f.write(self.toBytes(voxel_size / self.res))

def gridToBinaryStl(grid: VoxelGrid, settings: MeshSettings = None, trim: bool = True):
    """
    Convert a voxel grid to a binary STL file.

    Disconnected voxels are removed from the grid first, so the grid is
    modified in place when trim is enabled.

    ----

    Example:

    ``data = gridToBinaryStl(grid)``

    ----

    Args:
        grid: VoxelGrid object
        settings: MeshSettings object, defaults to settings from environment variables
        trim: Enable/disable removal of disconnected voxels

    Returns:
        File contents as bytes
    """
    if settings is None:
        settings = MeshSettings()
    settings.validate()

    if grid.isZeroSize():
        raise ValueError('Voxel grid has zero size: ' + str(grid.getSize()))

    if trim:
        removed = keepLargestComponent(grid)
        if removed > 0:
            print('Removed ' + str(removed) + ' disconnected voxels')

    mesh = Mesh.fromVoxelGrid(grid, settings.resolution, settings.wall_thickness)
    return mesh.toBytes(settings.getScale())
