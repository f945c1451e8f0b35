from setuptools import setup

setup(
    name="watts-up",
    packages=["watts_up"],
    version="0.9.0",
    description="Estimate the daily energy use of household appliances and compare it with the average household.",
    license="Protected",
    install_requires=["pendulum",  # handle datetime instances with ease
                      "dacite",  # convert dictionaries to dataclass instances
                      "orjson",  # fast(est) JSON encoder and decoder
                      ],
    extras_require={"test": ["pytest"]},
    classifiers=[],
    include_package_data=True,
    platforms="any",
)
