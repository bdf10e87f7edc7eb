import setuptools

with open("README.md", "r") as f:
    long_description = f.read()

with open('requirements.txt') as f:
    requirements = f.read().splitlines()

setuptools.setup(
    name="shadowvox",
    version="0.1.0",
    author="Cole Brauer",
    description="A toolkit for converting solid and lattice voxel grids into printable binary STL meshes",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "shadowvox_examples"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
    ],
    install_requires=requirements,
    extras_require={
        "test": ["pytest", "meshio"],
    },
    include_package_data=True,
)
