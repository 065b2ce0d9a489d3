# File: harvester/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. All feature models (run history) inherit from this.
Base = declarative_base()
