from setuptools import setup, find_packages
import re

# Read version from smartcomps/__init__.py
with open('smartcomps/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='smartcomps',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'smartcomps': ['config/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'smart-comps=smartcomps.cli.__main__:main',
            'smart-comps-mcp=smartcomps.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Compensation comparison, offer recommendation and risk advice for recruiters.',
    python_requires='>=3.10',
)
