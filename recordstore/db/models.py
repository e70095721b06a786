"""
Shared SQLAlchemy base.

Record types handled by ``ObjectStore`` are declared on ``Base`` so that
``SessionContext`` can resolve them by entity name through ``Base.registry``.
"""
from sqlalchemy.orm import declarative_base


Base = declarative_base()
