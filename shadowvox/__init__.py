# -*- coding: utf-8 -*-
"""
----

# shadowvox

shadowvox is a Python library for turning voxel grids into printable meshes. Each voxel can be solid or a thin-walled lattice cell with walls on any combination of axes, so that light passes through the open axes of a part. The library removes disconnected voxels, extracts a closed triangle surface, and writes it as a binary STL file ready for slicing.

## Features

### Voxel Grids

- Per-voxel solid and per-axis wall flags
- Creation from occupancy arrays or flat flag lists
- Bounds-safe voxel queries

### Model Cleanup

- Connected component labeling based on shared walls
- Removal of all voxels outside the largest component

### Mesh Generation

- Conversion of solid voxels to box surfaces without interior faces
- Conversion of lattice voxels to thin-walled frames with configurable wall thickness
- Fixed-point integer vertex coordinates

### File Export

- Binary STL export with configurable voxel size
- Binary STL import for inspection

## Installation

The shadowvox library can be installed using pip.

    pip3 install -e .

## Templates

Base template for creating scripts:

    # Import Library
    import shadowvox as sv

    # Start Application
    if __name__=='__main__':
        # Create Grid
        grid = sv.VoxelGrid.empty((3, 3, 3))
        grid.setVoxel((1, 1, 1), solid=True)
        grid.setVoxel((0, 1, 1), surfaces=[sv.Axis.Y, sv.Axis.Z])

        # Configure Settings
        settings = sv.MeshSettings()
        settings.setVoxelSize(2.0)

        # Create and Export Mesh
        data = sv.gridToBinaryStl(grid, settings)
        with open('result.stl', 'wb') as f:
            f.write(data)

## Settings

Meshing settings can be set with environment variables:

- SV_RESOLUTION: fixed-point units per voxel (default 1000)
- SV_WALL_THICKNESS: lattice wall thickness in fixed-point units (default 10)
- SV_VOXEL_SIZE: voxel edge length in mm (default 1.0)

----

Copyright 2021 - Cole Brauer, Dan Aukes
"""

name = "shadowvox"
__version__ = "0.1.0"

from shadowvox.voxel_grid import VoxelGrid, Axis, SOLID, SURFACE_X, SURFACE_Y, SURFACE_Z
from shadowvox.components import labelComponents, keepLargestComponent
from shadowvox.surface import extractSurface, DEFAULT_RESOLUTION, DEFAULT_WALL_THICKNESS
from shadowvox.stl import writeBinaryStl, readBinaryStl
from shadowvox.settings import MeshSettings
from shadowvox.mesh import Mesh, gridToBinaryStl
