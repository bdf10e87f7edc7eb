"""
Binary STL Serialization

----

Copyright 2021 - Cole Brauer, Dan Aukes
"""

import numpy as np

STL_HEADER_SIZE = 80
STL_RECORD_SIZE = 50

# Normal, three vertices, attribute byte count
STL_RECORD_DTYPE = np.dtype([
    ('normal', '<f4', (3,)),
    ('vertices', '<f4', (3, 3)),
    ('attribute', '<u2')
])

def writeBinaryStl(triangles: np.ndarray, scale: float = 1.0):
    """
    Encode triangles as a binary STL file.

    The header and every normal and attribute field are zero. Vertex
    coordinates are multiplied by scale and stored as little-endian float32.

    ----

    Example:

    ``data = writeBinaryStl(tris, 0.001)``

    ----

    Args:
        triangles: Triangle array with shape (n, 3, 3)
        scale: Output units per input unit

    Returns:
        File contents as bytes
    """
    triangles = np.asarray(triangles).reshape(-1, 3, 3)

    records = np.zeros(len(triangles), dtype=STL_RECORD_DTYPE)
    records['vertices'] = triangles * scale

    header = bytes(STL_HEADER_SIZE) + np.array([len(triangles)], dtype='<u4').tobytes()
    return header + records.tobytes()

def readBinaryStl(data: bytes):
    """
    Decode the triangles of a binary STL file.

    Args:
        data: File contents

    Returns:
        Vertex array with shape (n, 3, 3)
    """
    if len(data) < STL_HEADER_SIZE + 4:
        raise ValueError('STL data is too short to contain a header (' + str(len(data)) + ' bytes)')

    count = int(np.frombuffer(data, dtype='<u4', count=1, offset=STL_HEADER_SIZE)[0])
    expected = STL_HEADER_SIZE + 4 + count * STL_RECORD_SIZE
    if len(data) != expected:
        raise ValueError('STL data length ' + str(len(data)) + ' does not match ' + str(count) + ' triangles (' + str(expected) + ' bytes)')

    records = np.frombuffer(data, dtype=STL_RECORD_DTYPE, count=count, offset=STL_HEADER_SIZE + 4)
    return records['vertices'].astype(np.float32)
