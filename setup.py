from setuptools import setup, find_packages

setup(
    name='coupy',
    version='2023.05',
    packages=find_packages(include=["coupy", "coupy.*"]),
    install_requires=["numpy >=1.10", "tqdm>=4.31"],
    extras_require={"tests": ["pytest"]},
)
