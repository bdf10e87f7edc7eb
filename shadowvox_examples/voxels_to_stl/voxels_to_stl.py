"""
Create a VoxelGrid with a solid frame and lattice panels and use it to
generate an STL file

The edges of the block are solid. The voxels on each face of the block are
lattice cells with a wall only on that face's axis, and the core is left
empty. The lattice panels are meshed as thin plates held by their frames.
"""

import shadowvox as sv

if __name__ == '__main__':
    size = 4
    grid = sv.VoxelGrid.empty((size, size, size))

    for x in range(size):
        for y in range(size):
            for z in range(size):
                on_side = [c in (0, size - 1) for c in (x, y, z)]

                if sum(on_side) >= 2:
                    # Edges and corners of the block
                    grid.setVoxel((x, y, z), solid=True)
                elif sum(on_side) == 1:
                    # Face panels, walled normal to the face
                    grid.setVoxel((x, y, z), surfaces=[sv.Axis(on_side.index(True))])

    removed = sv.keepLargestComponent(grid) # Remove voxels not attached to the frame
    print('Disconnected voxels removed: ' + str(removed))

    mesh = sv.Mesh.fromVoxelGrid(grid, wall_thickness=40) # Convert VoxelGrid to a Mesh
    mesh.export('mesh.stl', 10.0) # Save the mesh to an stl file with 10mm voxels
