from setuptools import setup, find_packages

def parse_requirements(requirements):
    with open(requirements) as f:
        return [l.strip('\n') for l in f if l.strip('\n') and not l.startswith('#')]

requirements = parse_requirements("requirements.txt")

setup(
    name='storefront_backend',
    version='0.1.0',
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.4",
            "fakeredis>=2.20",
            "httpx>=0.25",
        ],
    },
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={
        "storefront_backend": ["i18n/*.yaml"],
    },
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "storefront-server=storefront_backend.server:main",
        ],
    }
)
