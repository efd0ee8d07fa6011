from setuptools import setup, find_packages

setup(
    name='snodelist',
    version='0.1',
    description='Expand, compress, and format Slurm host lists',
    license='BSD 3-clause',
    packages=find_packages(exclude=['tests']),
    python_requires='>=3.6',
    install_requires=[
        'ClusterShell>=1.8',
    ],
    extras_require={
        'tests': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'snodelist=snodelist.main:main',
        ],
    },
    classifiers=[
        'Intended Audience :: Science/Research',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
    ],
)
