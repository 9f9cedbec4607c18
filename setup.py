from setuptools import setup, find_packages

setup(
   name="rawhandle",
   version="0.1.0",
   python_requires=">=3.12",
   packages=find_packages(exclude=["tests", "tests.*"]),
   install_requires=[
      "pydantic-settings",
   ],
   extras_require={
      "test": [
         "pytest",
      ],
   },
)
