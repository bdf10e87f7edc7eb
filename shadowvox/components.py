"""
Component Filtering

Connected component labeling for voxel grids, used to remove disconnected
voxels before meshing

----

Copyright 2021 - Cole Brauer, Dan Aukes
"""

import numpy as np
from numba import njit

from shadowvox.voxel_grid import VoxelGrid, voxelHasSurface, voxelIsEmpty

def labelComponents(grid: VoxelGrid):
    """
    Find the connected components of a grid.

    Two voxels that are adjacent along one axis are connected if both of
    them have a wall on at least one of the two other axes.

    Components are numbered starting at 1 in order of their lowest linear
    voxel index. Empty voxels are labeled 0.

    ----

    Example:

    ``labels, sizes = labelComponents(grid)``

    ----

    Args:
        grid: VoxelGrid to label

    Returns:
        Label array with the shape of the grid, array of component sizes
    """
    voxel_count = grid.getVoxelCount()
    parent = np.arange(voxel_count, dtype=np.int64)
    size = np.ones(voxel_count, dtype=np.int64)

    linkNeighbors(grid.voxels, parent, size)
    roots = resolveRoots(parent)

    active = grid.getActiveMask().ravel(order='F')
    labels = np.zeros(voxel_count, dtype=np.int64)

    if np.any(active):
        _, first_index, inverse = np.unique(roots[active], return_index=True, return_inverse=True)

        # Renumber by first appearance
        order = np.argsort(first_index, kind='stable')
        rank = np.empty_like(order)
        rank[order] = np.arange(len(order))
        labels[active] = rank[inverse.ravel()] + 1

    sizes = np.bincount(labels, minlength=1)[1:]
    return labels.reshape(grid.getSize(), order='F'), sizes

def keepLargestComponent(grid: VoxelGrid):
    """
    Clear every voxel that is not part of the largest connected component.

    If more than one component has the largest size, the component containing
    the voxel with the lowest linear index is kept. The grid is modified in
    place.

    Args:
        grid: VoxelGrid to filter

    Returns:
        Number of voxels cleared
    """
    labels, sizes = labelComponents(grid)
    if len(sizes) == 0:
        return 0

    keep_label = int(np.argmax(sizes)) + 1
    remove = (labels > 0) & (labels != keep_label)
    removed = int(np.count_nonzero(remove))

    if removed > 0:
        grid.clearMask(remove)

    return removed

# Helper functions ##############################################################
@njit()
def findRoot(parent: np.ndarray, i: int):
    """
    Find the root of a set, compressing the path along the way.

    Args:
        parent: Parent index of each element
        i: Element index

    Returns:
        Root index
    """
    root = i
    while parent[root] != root:
        root = parent[root]

    while parent[i] != root:
        next_i = parent[i]
        parent[i] = root
        i = next_i

    return root

@njit()
def unionRoots(parent: np.ndarray, size: np.ndarray, i: int, j: int):
    root_i = findRoot(parent, i)
    root_j = findRoot(parent, j)
    if root_i == root_j:
        return

    # Attach the smaller set
    if size[root_i] < size[root_j]:
        root_i, root_j = root_j, root_i

    parent[root_j] = root_i
    size[root_i] += size[root_j]

@njit()
def voxelsConnected(voxels: np.ndarray, axis: int, x: int, y: int, z: int, x_adj: int, y_adj: int, z_adj: int):
    """
    Check if two voxels adjacent along an axis share a wall on a perpendicular axis.

    Args:
        voxels: VoxelGrid.voxels
        axis: Axis along which the voxels are adjacent
        x: First voxel X location
        y: First voxel Y location
        z: First voxel Z location
        x_adj: Second voxel X location
        y_adj: Second voxel Y location
        z_adj: Second voxel Z location

    Returns:
        True if the voxels are connected
    """
    for offset in range(1, 3):
        other_axis = (axis + offset) % 3
        if voxelHasSurface(voxels, other_axis, x, y, z) and voxelHasSurface(voxels, other_axis, x_adj, y_adj, z_adj):
            return True
    return False

@njit()
def linkNeighbors(voxels: np.ndarray, parent: np.ndarray, size: np.ndarray):
    x_len = voxels.shape[0]
    y_len = voxels.shape[1]
    z_len = voxels.shape[2]

    for z in range(z_len):
        for y in range(y_len):
            for x in range(x_len):
                if voxelIsEmpty(voxels, x, y, z):
                    continue

                i = x + x_len * (y + y_len * z)
                if voxelsConnected(voxels, 0, x, y, z, x + 1, y, z):
                    unionRoots(parent, size, i, i + 1)
                if voxelsConnected(voxels, 1, x, y, z, x, y + 1, z):
                    unionRoots(parent, size, i, i + x_len)
                if voxelsConnected(voxels, 2, x, y, z, x, y, z + 1):
                    unionRoots(parent, size, i, i + x_len * y_len)

@njit()
def resolveRoots(parent: np.ndarray):
    roots = np.empty_like(parent)
    for i in range(len(parent)):
        roots[i] = findRoot(parent, i)
    return roots
