from setuptools import setup, find_packages

setup(
    name="oracle-cloud-mcp",
    version="1.0.0",
    description="Oracle Cloud MCP — OCI compute, storage, networking, database and IAM as assistant tools",
    author="Oracle Cloud MCP",
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["oci_mcp"],
    install_requires=[
        "oci>=2.120.0",
        "mcp>=1.9.0,<2",
        "jsonschema>=4.18.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "oci-mcp=oci_mcp:main",
        ],
    },
)
