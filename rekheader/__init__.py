"""rekheader

This module adds the Fraunhofer EZRT .rek volume header to raw volume data without any header, such as:

- REK header record (width, height, depth, sample format, voxel size, slice step) and its binary layout
- command line parsing and validation of the header options
- conversion of a headerless .raw volume into a .rek volume file
- loading .rek volume files into numpy arrays
"""
