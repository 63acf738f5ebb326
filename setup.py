from setuptools import find_packages, setup

setup(
  name='malvar-demosaic',
  version='0.1.0',
  description='Malvar-He-Cutler demosaicing of RGGB Bayer images',
  python_requires='>=3.10',
  packages=find_packages(include=['malvar_demosaic', 'malvar_demosaic.*'], exclude=['malvar_demosaic.tests']),
  install_requires=[
    'numpy',
    'torch',
    'beartype',
    'pydantic>=2',
  ],
  extras_require={
    'test': ['pytest'],
  },
  entry_points={
    'console_scripts': [
      'malvar-benchmark=malvar_demosaic.scripts.benchmark:main',
    ],
  },
)
