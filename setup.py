from setuptools import find_packages, setup

setup(
    name="jenkins-job-dsl",
    version="0.1.0",
    packages=find_packages(
        include=[
            "jobdsl_common",
            "jobdsl_common.*",
            "jobdsl_remote",
            "jobdsl_remote.*",
            "jobdsl_controller",
            "jobdsl_controller.*",
            "jobdsl_admin",
            "jobdsl_admin.*",
        ]
    ),
    install_requires=[
        "requests>=2.31.0",
        "click>=8.1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-xdist>=3.3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "jobdsl=jobdsl_admin.cli:main",
        ],
    },
    python_requires=">=3.10",
)
