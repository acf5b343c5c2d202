from setuptools import setup, find_packages

setup(
    name="traffic_filter",
    version="0.1.0",
    packages=find_packages(where="."),
    package_dir={"": "."},
    package_data={
        "traffic_filter": ["data/*.yaml"],
    },
    install_requires=[
        "pyyaml>=5.4",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'traffic-filter=traffic_filter.main:main',
        ],
    },
    author="Network Security Team",
    description="A display filter builder that parses, edits, serializes and explains packet filter expressions",
    keywords="network, packet filter, display filter, parser, wireshark",
    python_requires=">=3.7",
)
