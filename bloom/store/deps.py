from fastapi import Depends
from sqlalchemy.orm import Session

from bloom.db import get_db
from bloom.store.base import Store
from bloom.store.sql import SqlStore

def get_store(db: Session = Depends(get_db)) -> Store:
    return SqlStore(db)
