# backend/tradelink/models/base.py

import uuid
from datetime import datetime


def gen_uuid():
    return str(uuid.uuid4())


def utcnow():
    return datetime.utcnow()
