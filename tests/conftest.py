import os


# Keep test runs independent of whatever the developer exported locally.
for _name in (
    "COLLECTION_LOG_LEVEL",
    "COLLECTION_LOG_JSON",
    "COLLECTION_SHUFFLE_SEED",
    "COLLECTION_ERROR_ALERT_THRESHOLD",
):
    os.environ.pop(_name, None)
