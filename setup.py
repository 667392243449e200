from setuptools import setup, find_packages

setup(name='rrt_planning',
      version='0.1',
      description='Randomized tree search for 3D paths through point cloud obstacles, height limits and no-fly zones.',
      url='',
      author='',
      author_email='',
      license='',
      package_dir={'': 'src'},
      packages=find_packages(where='src'),
      python_requires='>=3.8',
      install_requires=["numpy>=1.19.2", "scipy>=1.5", "scikit-learn>=0.23.1", "igraph>=0.10", "pyquaternion>=0.9.5"],
      extras_require={"test": ["pytest"]},
      include_package_data=True)
