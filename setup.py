from setuptools import setup

version = {}
with open('uncval/version.py', 'r') as f:
    exec(f.read(), version)

with open('README.md', 'r', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='uncval',
    version=version['__version__'],
    description='Values with propagated uncertainty and real intervals',
    long_description=long_description,
    long_description_content_type='text/markdown',
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.19',
        'pint>=0.16',
        'pyyaml>=5.4',
        ],
    extras_require={'test': ['pytest']},
    packages=['uncval', 'uncval.common'],
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Development Status :: 4 - Beta',
        'Operating System :: OS Independent',
        ]
    )
