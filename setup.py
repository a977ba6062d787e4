from setuptools import setup, find_packages

setup(
    name='scribectl',
    version='0.1.0',
    packages=find_packages(),
    include_package_data=True,
    install_requires=[
        'typer',
        'kubernetes>=18.20.0',
        'pyyaml',
        'pydantic>=2',
        'jsonschema',
        'python-dotenv',
        'urllib3',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'scribe=scribectl.cli:app'
        ]
    },
    description='Command line tool for creating Scribe volume replication resources across clusters',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
