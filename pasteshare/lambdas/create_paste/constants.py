# Event codes
PASTE_CREATED = 'PASTE_CREATED'
INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
VALIDATION_FAILED = 'VALIDATION_FAILED'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
