"""
Surface Extraction

Convert a voxel grid into a closed triangle surface. Lattice voxels are
meshed as thin-walled frames.

----

Copyright 2021 - Cole Brauer, Dan Aukes
"""

import numpy as np
from typing import List, Tuple
from tqdm import tqdm

from shadowvox.voxel_grid import VoxelGrid

# Default fixed-point units per voxel
DEFAULT_RESOLUTION = 1000

# Default wall thickness in fixed-point units
DEFAULT_WALL_THICKNESS = 10

def extractSurface(grid: VoxelGrid, resolution: int = DEFAULT_RESOLUTION, wall_thickness: int = DEFAULT_WALL_THICKNESS):
    """
    Generate the surface triangles of a voxel grid.

    Vertices are integer fixed-point coordinates. Voxel (x, y, z) spans
    [x*resolution, (x+1)*resolution] along X, and likewise for Y and Z.
    Each voxel is split by planes at wall_thickness from its boundary. The
    corner and edge blocks are always filled, the block at the middle of
    each side is filled if the voxel has a wall on that axis, and the center
    block is filled if the voxel has walls on all three axes.

    Voxels are visited with X changing fastest, and each voxel emits its
    faces in the order +X, -X, +Y, -Y, +Z, -Z. Triangles are wound
    counter-clockwise when seen from outside the part.

    ----

    Example:

    ``tris = extractSurface(grid, 10, 1)``

    ----

    Args:
        grid: VoxelGrid to mesh
        resolution: Fixed-point units per voxel
        wall_thickness: Wall thickness in fixed-point units, must be less than resolution/2

    Returns:
        Triangle array with shape (n, 3, 3)
    """
    x_len, y_len, z_len = grid.getSize()
    tris = []

    for z in tqdm(range(z_len), desc='Meshing'):
        for y in range(y_len):
            for x in range(x_len):
                if grid.isEmpty(x, y, z):
                    continue

                has = tuple(grid.hasSurface(axis, x, y, z) for axis in range(3))
                for axis in range(3):
                    for sign in (1, -1):
                        addDirectionFaces(tris, grid, (x, y, z), has, axis, sign, resolution, wall_thickness)

    return np.array(tris, dtype=np.int64).reshape(-1, 3, 3)

# Helper functions ##############################################################
def addDirectionFaces(tris: List, grid: VoxelGrid, coords: Tuple[int, int, int], has: Tuple[bool, bool, bool],
                      axis: int, sign: int, resolution: int, wall_thickness: int):
    """
    Add the faces owned by one side of a voxel.

    This covers the boundary plane of the voxel on that side, and for lattice
    voxels the walls between that side and the inside of the voxel.

    Args:
        tris: Triangle list to append to
        grid: VoxelGrid being meshed
        coords: Voxel location (x, y, z)
        has: Wall present on each axis
        axis: Axis of the side
        sign: 1 for the positive side, -1 for the negative side
        resolution: Fixed-point units per voxel
        wall_thickness: Wall thickness in fixed-point units

    Returns:
        None
    """
    axis_b = (axis + 1) % 3
    axis_c = (axis + 2) % 3

    full = [(coords[k] * resolution, (coords[k] + 1) * resolution) for k in range(3)]
    inset = [(low + wall_thickness, high - wall_thickness) for low, high in full]

    end = 1 if sign > 0 else 0
    outer = full[axis][end]
    inner = inset[axis][end]

    neighbor = list(coords)
    neighbor[axis] += sign

    # Boundary plane
    if grid.isEmpty(*neighbor):
        if has[axis]:
            addRect(tris, axis, outer, full, sign)
        else:
            addRing(tris, axis, outer, full, inset, sign)
    elif has[axis] and not grid.hasSurface(axis, *neighbor):
        # Rim of the wall showing through the neighbor's opening
        addRect(tris, axis, outer, inset, sign)

    if all(has):
        return

    if has[axis]:
        # Back of the wall, facing the inside of the voxel
        bounds = list(inset)
        if has[axis_b] and not has[axis_c]:
            bounds[axis_c] = full[axis_c]
        elif has[axis_c] and not has[axis_b]:
            bounds[axis_b] = full[axis_b]
        addRect(tris, axis, inner, bounds, -sign)
    elif not (has[axis_b] and has[axis_c]):
        # Sides of the opening between the boundary plane and the inset depth
        bounds = list(inset)
        bounds[axis] = (min(inner, outer), max(inner, outer))
        for side_axis in (axis_b, axis_c):
            addRect(tris, side_axis, inset[side_axis][0], bounds, 1)
            addRect(tris, side_axis, inset[side_axis][1], bounds, -1)

def addRect(tris: List, axis: int, level: int, bounds: List[Tuple[int, int]], sign: int):
    """
    Add an axis-aligned rectangle as two triangles.

    Args:
        tris: Triangle list to append to
        axis: Axis normal to the rectangle
        level: Coordinate of the rectangle along the axis
        bounds: (low, high) extent along each axis, the entry for the normal axis is ignored
        sign: Direction of the face normal along the axis

    Returns:
        None
    """
    u0, u1 = bounds[(axis + 1) % 3]
    v0, v1 = bounds[(axis + 2) % 3]
    addQuad(tris, axis, level, [(u0, v0), (u1, v0), (u1, v1), (u0, v1)], sign)

def addRing(tris: List, axis: int, level: int, full: List[Tuple[int, int]], inset: List[Tuple[int, int]], sign: int):
    """
    Add the frame between a full voxel side and its inset opening as four trapezoids.

    Args:
        tris: Triangle list to append to
        axis: Axis normal to the frame
        level: Coordinate of the frame along the axis
        full: Voxel extent along each axis
        inset: Opening extent along each axis
        sign: Direction of the face normal along the axis

    Returns:
        None
    """
    u0, u1 = full[(axis + 1) % 3]
    v0, v1 = full[(axis + 2) % 3]
    iu0, iu1 = inset[(axis + 1) % 3]
    iv0, iv1 = inset[(axis + 2) % 3]

    addQuad(tris, axis, level, [(u0, v0), (u1, v0), (iu1, iv0), (iu0, iv0)], sign)
    addQuad(tris, axis, level, [(u1, v0), (u1, v1), (iu1, iv1), (iu1, iv0)], sign)
    addQuad(tris, axis, level, [(u1, v1), (u0, v1), (iu0, iv1), (iu1, iv1)], sign)
    addQuad(tris, axis, level, [(u0, v1), (u0, v0), (iu0, iv0), (iu0, iv1)], sign)

def addQuad(tris: List, axis: int, level: int, corners: List[Tuple[int, int]], sign: int):
    """
    Add a planar quad as the triangles (p0, p1, p2) and (p0, p2, p3).

    Corners are given counter-clockwise in the plane of the two other axes,
    which gives a normal along +axis. A negative sign reverses the winding.

    Args:
        tris: Triangle list to append to
        axis: Axis normal to the quad
        level: Coordinate of the quad along the axis
        corners: Four in-plane corners
        sign: Direction of the face normal along the axis

    Returns:
        None
    """
    if sign < 0:
        corners = [corners[0], corners[3], corners[2], corners[1]]

    axis_u = (axis + 1) % 3
    axis_v = (axis + 2) % 3

    points = []
    for u, v in corners:
        point = [0, 0, 0]
        point[axis] = level
        point[axis_u] = u
        point[axis_v] = v
        points.append(point)

    tris.append([points[0], points[1], points[2]])
    tris.append([points[0], points[2], points[3]])
