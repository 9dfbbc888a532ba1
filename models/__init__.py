"""
Persistence layer: SQLAlchemy models plus the DBStorage singleton.
"""
from models.db_storage import DBStorage

storage = DBStorage()
storage.reload()
