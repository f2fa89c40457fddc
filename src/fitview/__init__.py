"""
fitview – list views, dashboards and API access for the fitness platform.

Import path convention::

    from fitview.application.listing import CLASSES, ListViewController
    from fitview.kernel.records import FitnessClass, parse_records
    from fitview.adapters.http import ApiClientBuilder, FitnessApi
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
