# Event codes
PASTE_VIEWED = 'PASTE_VIEWED'
MISSING_PASTE_ID = 'MISSING_PASTE_ID'
PASTE_NOT_FOUND = 'PASTE_NOT_FOUND'
PASTE_EXPIRED = 'PASTE_EXPIRED'
PASTE_VIEW_LIMIT_EXCEEDED = 'PASTE_VIEW_LIMIT_EXCEEDED'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
