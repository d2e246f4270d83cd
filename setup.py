"""
Setup file.
"""

from setuptools import setup

if __name__ == "__main__":
    setup(
        package_data={"cmakespec": ["assets/CMakeLists.txt", "assets/TestTargets.cmake"]},
        include_package_data=True)
