from setuptools import setup
from setuptools import find_namespace_packages

setup(
    name='ecs-deploy-task-definition',
    version='0.1.0',
    packages=find_namespace_packages(include=['ecsdeploy', 'ecsdeploy.*']),
    python_requires='>=3.8',
    install_requires=[
        'Click',
        'PyYAML',
        'boto3',
        'botocore'
    ],
    extras_require={
        'test': [
            'pytest'
        ],
    },
    entry_points={
        'console_scripts': [
            'ecs-deploy = ecsdeploy.ecsdeploy:main',
        ],
    },
)
