from typing import Tuple

SERVICE_PREFIX = "indexwire"

ORM_DRIVER = "orm"
MONGODB_DRIVER = "mongodb"

SUPPORTED_DRIVERS: Tuple[str, ...] = (ORM_DRIVER, MONGODB_DRIVER)

DOC_TYPE_FIELD = "doc_type"
