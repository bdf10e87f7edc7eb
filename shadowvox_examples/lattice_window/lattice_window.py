"""
Generate a block that shows a different pattern when light shines through
it along each axis.

Cells marked with X are solid. Other cells are lattice voxels that are
open along the viewing axis, so light passes through them.
"""

import shadowvox as sv

PATTERN = [
    'XXXXX',
    'X   X',
    'X X X',
    'X   X',
    'XXXXX',
]

if __name__ == '__main__':
    size = len(PATTERN)
    grid = sv.VoxelGrid.empty((size, size, size))

    # Extrude the pattern along X, leaving the holes open along X
    for x in range(size):
        for y in range(size):
            for z in range(size):
                if PATTERN[y][z] == 'X':
                    grid.setVoxel((x, y, z), solid=True)
                else:
                    grid.setVoxel((x, y, z), surfaces=[sv.Axis.Y, sv.Axis.Z])

    # Configure meshing
    settings = sv.MeshSettings()
    settings.setVoxelSize(4.0)
    settings.setWallThickness(50)

    # Create and export the STL file
    data = sv.gridToBinaryStl(grid, settings)
    print('Triangles: ' + str(len(sv.readBinaryStl(data))))

    with open('lattice_window.stl', 'wb') as f:
        f.write(data)
