from setuptools import setup, find_packages

setup(
    name='compactl',
    version='0.1.0',
    packages=find_packages(),
    include_package_data=True,
    install_requires=[
        'typer[all]',
        'fastapi',
        'uvicorn',
        'pydantic>=2',
        'pyyaml',
        'jsonschema',
        'python-dotenv',
        'requests'
    ],
    extras_require={
        'test': [
            'pytest',
            'httpx',
        ]
    },
    entry_points={
        'console_scripts': [
            'compactl=compactl.cli:app'
        ]
    },
    author='Your Name',
    description='Add and delete cluster components implied by configuration changes, as ordered API batches',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.9',
)
