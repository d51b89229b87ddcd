from setuptools import setup, find_packages

setup(
    name="lmrc-config",
    version="1.0.0",
    description="Club profile, booking session and runtime configuration validation for rowing club booking apps",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        'PyYAML>=6.0',
        'python-dotenv>=1.0.0',
        'tabulate>=0.9.0',
        'typing_extensions>=4.5.0',
        'tzdata'
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'coverage>=7.0'
        ]
    },
    entry_points={
        'console_scripts': [
            'lmrc-config=lmrc_config.cli:main'
        ]
    }
)
