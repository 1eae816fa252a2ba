# Event codes
HEALTHCHECK_OK = 'HEALTHCHECK_OK'
HEALTHCHECK_FAILED = 'HEALTHCHECK_FAILED'
