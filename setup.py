from setuptools import setup, find_packages


setup(
    name="pipealu",
    version="0.1",
    description="Single-cycle and 2-stage pipelined RV32I ALUs",
    license="BSD",
    python_requires=">=3.8",
    install_requires=["amaranth>=0.5,<0.6"],
    extras_require={ "test": ["pytest"] },
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["cli"],
)
