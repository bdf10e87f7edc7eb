"""
VoxelGrid Class

Dense grid of per-voxel flag bytes describing solid and lattice voxels

----

Copyright 2021 - Cole Brauer, Dan Aukes
"""

import numpy as np
from enum import Enum
from typing import Tuple, Iterable, Union as TypeUnion
from numba import njit

# Voxel flag bits
SOLID = 0x01
SURFACE_X = 0x02
SURFACE_Y = 0x04
SURFACE_Z = 0x08
ACTIVE_MASK = 0x0F

class Axis(Enum):
    """
    Options for voxel axes.
    """
    X = 0
    Y = 1
    Z = 2

class VoxelGrid:
    """
    Grid of voxel flags.

    Each voxel holds a SOLID bit and one SURFACE bit per axis. A solid voxel
    reports a surface on every axis. Voxels with no bits set are empty.

    Data is stored in Fortran order so that the flat index of voxel
    (x, y, z) is x + size_x*(y + size_y*z).
    """

    def __init__(self, voxels: np.ndarray):
        """
        Initialize a VoxelGrid object.

        Args:
            voxels: 3D array of voxel flags, indexed [x, y, z]
        """
        voxels = np.array(voxels, dtype=np.uint8)
        if voxels.ndim != 3:
            raise ValueError('Voxel data must be a 3D array, got ' + str(voxels.ndim) + ' dimensions')

        self.voxels = np.asfortranarray(voxels & ACTIVE_MASK)

    @classmethod
    def empty(cls, size: Tuple[int, int, int]):
        """
        Create a grid with all voxels empty.

        ----

        Example:

        ``grid = VoxelGrid.empty((5, 5, 5))``

        ----

        Args:
            size: Grid size in voxels (x, y, z)

        Returns:
            VoxelGrid
        """
        if len(size) != 3 or min(size) < 0:
            raise ValueError('Grid size must be three non-negative integers')

        return cls(np.zeros(tuple(size), dtype=np.uint8))

    @classmethod
    def fromOccupancy(cls, occupancy: np.ndarray):
        """
        Create a grid in which every occupied cell is a solid voxel.

        Args:
            occupancy: 3D array, nonzero values are treated as occupied

        Returns:
            VoxelGrid
        """
        occupancy = np.asarray(occupancy, dtype=bool)
        return cls(np.where(occupancy, SOLID, 0).astype(np.uint8))

    @classmethod
    def fromFlags(cls, size_x: int, size_y: int, size_z: int, data):
        """
        Create a grid from a flat list of voxel flags.

        ----

        Example:

        ``grid = VoxelGrid.fromFlags(2, 1, 1, [SOLID, SURFACE_Y | SURFACE_Z])``

        ----

        Args:
            size_x: Grid size along X
            size_y: Grid size along Y
            size_z: Grid size along Z
            data: Flags ordered by x + size_x*(y + size_y*z)

        Returns:
            VoxelGrid
        """
        data = np.asarray(data, dtype=np.uint8).ravel()
        if data.size != size_x * size_y * size_z:
            raise ValueError('Expected ' + str(size_x * size_y * size_z) + ' voxel flags, got ' + str(data.size))

        return cls(data.reshape((size_x, size_y, size_z), order='F'))

    @classmethod
    def copy(cls, grid):
        """
        Initialize a VoxelGrid that is a copy of another grid.

        Args:
            grid: Reference VoxelGrid object

        Returns:
            VoxelGrid
        """
        return cls(grid.voxels)

    def getSize(self):
        """
        Get the grid size in voxels.

        Returns:
            (size_x, size_y, size_z)
        """
        x_len, y_len, z_len = self.voxels.shape
        return x_len, y_len, z_len

    def isZeroSize(self):
        return self.voxels.size == 0

    def getVoxelCount(self):
        return int(self.voxels.size)

    def countActive(self):
        """
        Get the number of voxels with at least one flag set.

        Returns:
            Active voxel count
        """
        return int(np.count_nonzero(self.getActiveMask()))

    def linearIndex(self, x: int, y: int, z: int):
        x_len, y_len, _ = self.voxels.shape
        return x + x_len * (y + y_len * z)

    def getActiveMask(self):
        """
        Get a mask of the voxels with at least one flag set.

        Returns:
            Boolean array with the shape of the grid
        """
        return voxelActiveMask(self.voxels)

    def getData(self):
        """
        Get the voxel flags as a flat array in linear index order.

        Returns:
            1D view of the voxel data
        """
        return self.voxels.ravel(order='F')

    # Voxel queries #############################################################
    def inBounds(self, x: int, y: int, z: int):
        return voxelInBounds(self.voxels, x, y, z)

    def isSolid(self, x: int, y: int, z: int):
        """
        Check if a voxel is solid. Coordinates outside the grid are not solid.

        Args:
            x: Voxel X location
            y: Voxel Y location
            z: Voxel Z location

        Returns:
            True if the SOLID bit is set
        """
        return voxelIsSolid(self.voxels, x, y, z)

    def hasSurface(self, axis: TypeUnion[Axis, int], x: int, y: int, z: int):
        """
        Check if a voxel has a wall normal to an axis.

        Solid voxels have a wall on every axis. Coordinates outside the grid
        have no walls.

        Args:
            axis: Axis of the wall normal
            x: Voxel X location
            y: Voxel Y location
            z: Voxel Z location

        Returns:
            True if the voxel has a wall on the axis
        """
        return voxelHasSurface(self.voxels, axisIndex(axis), x, y, z)

    def isEmpty(self, x: int, y: int, z: int):
        """
        Check if a voxel has no flags set. Coordinates outside the grid are empty.

        Args:
            x: Voxel X location
            y: Voxel Y location
            z: Voxel Z location

        Returns:
            True if the voxel is empty
        """
        return voxelIsEmpty(self.voxels, x, y, z)

    def isActive(self, x: int, y: int, z: int):
        return not voxelIsEmpty(self.voxels, x, y, z)

    # Voxel modification ########################################################
    def setFlags(self, coords: Tuple[int, int, int], flags: int):
        """
        Overwrite the flags of a single voxel.

        Args:
            coords: Voxel location (x, y, z)
            flags: New flag value

        Returns:
            None
        """
        x, y, z = coords
        if not voxelInBounds(self.voxels, x, y, z):
            raise ValueError('Voxel ' + str(tuple(coords)) + ' is outside the grid')

        self.voxels[x, y, z] = flags & ACTIVE_MASK

    def setVoxel(self, coords: Tuple[int, int, int], solid: bool = False, surfaces: Iterable[TypeUnion[Axis, int]] = ()):
        """
        Set a voxel to solid, lattice, or empty.

        ----

        Example:

        ``grid.setVoxel((1, 0, 0), surfaces=[Axis.Y, Axis.Z])``

        ----

        Args:
            coords: Voxel location (x, y, z)
            solid: Enable/disable the SOLID bit
            surfaces: Axes that have a wall

        Returns:
            None
        """
        flags = SOLID if solid else 0
        for axis in surfaces:
            flags |= SURFACE_X << axisIndex(axis)

        self.setFlags(coords, flags)

    def clearVoxel(self, coords: Tuple[int, int, int]):
        self.setFlags(coords, 0)

    def clearMask(self, mask: np.ndarray):
        """
        Clear all voxels selected by a boolean mask.

        Args:
            mask: Boolean array with the same shape as the grid

        Returns:
            None
        """
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != self.voxels.shape:
            raise ValueError('Mask shape ' + str(mask.shape) + ' does not match grid shape ' + str(self.voxels.shape))

        self.voxels[mask] = 0

# Helper functions ##############################################################
def axisIndex(axis: TypeUnion[Axis, int]):
    """
    Convert an Axis or an integer to an axis index.

    Args:
        axis: Axis member or 0, 1, 2

    Returns:
        Axis index
    """
    if isinstance(axis, Axis):
        return axis.value
    if axis in (0, 1, 2):
        return int(axis)
    raise ValueError('Invalid axis: ' + str(axis))

@njit()
def voxelInBounds(voxels: np.ndarray, x: int, y: int, z: int):
    """
    Check if a location is inside the grid.

    Args:
        voxels: VoxelGrid.voxels
        x: Voxel X location
        y: Voxel Y location
        z: Voxel Z location

    Returns:
        True if the location is inside the grid
    """
    x_in_bounds = (x >= 0) and (x < voxels.shape[0])
    y_in_bounds = (y >= 0) and (y < voxels.shape[1])
    z_in_bounds = (z >= 0) and (z < voxels.shape[2])
    return x_in_bounds and y_in_bounds and z_in_bounds

@njit()
def voxelIsSolid(voxels: np.ndarray, x: int, y: int, z: int):
    if not voxelInBounds(voxels, x, y, z):
        return False
    return (voxels[x, y, z] & SOLID) != 0

@njit()
def voxelHasSurface(voxels: np.ndarray, axis: int, x: int, y: int, z: int):
    if not voxelInBounds(voxels, x, y, z):
        return False
    return (voxels[x, y, z] & (SOLID | (SURFACE_X << axis))) != 0

@njit()
def voxelIsEmpty(voxels: np.ndarray, x: int, y: int, z: int):
    if not voxelInBounds(voxels, x, y, z):
        return True
    return (voxels[x, y, z] & ACTIVE_MASK) == 0

@njit()
def voxelActiveMask(voxels: np.ndarray):
    mask = np.zeros(voxels.shape, dtype=np.bool_)
    for x in range(voxels.shape[0]):
        for y in range(voxels.shape[1]):
            for z in range(voxels.shape[2]):
                mask[x, y, z] = not voxelIsEmpty(voxels, x, y, z)
    return mask
