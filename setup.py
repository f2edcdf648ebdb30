from setuptools import setup, find_packages


setup(
    name='so3tools',
    version='1.0.0',
    description='3D rotation algebra: rotation matrices, quaternions, axis-angles, yaw-pitch-roll, rotation vectors, '
                'and rotation/scale decompositions',
    packages=find_packages(include=['so3tools', 'so3tools.*']),
    python_requires='>=3.12',
    install_requires=['numpy', 'scipy'],
    extras_require={'test': ['pytest', 'scipy']},
)
