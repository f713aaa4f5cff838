from setuptools import setup, find_packages

setup(
    name="smartcrop",
    version="0.1.0",
    description="Content-aware image cropping using skin, detail and saturation saliency",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "Pillow>=10.0.0",
        "opencv-python>=4.8.0",
        "numpy>=1.24.0",
        "click>=8.1.0",
        "tqdm>=4.65.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "black>=23.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "smartcrop=smartcrop.cli:cli",
        ],
    },
)
