from fastapi import Depends
from sqlalchemy.orm import Session

from b2b_app.database.connection import get_db
from b2b_app.services.rule_store import RuleStore


def get_rule_store(db: Session = Depends(get_db)) -> RuleStore:
    return RuleStore(db)
