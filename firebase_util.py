import json
import logging
import os
from typing import Optional

import firebase_admin
from firebase_admin import credentials, db
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Path to Firebase service account JSON
FIREBASE_CRED_PATH = os.getenv("FIREBASE_CRED_JSON", "./firebase-adminsdk.json")
FIREBASE_DB_URL = os.getenv("FIREBASE_DB_URL", "")

# Where the discount configuration blob lives
METAFIELD_NAMESPACE = os.getenv("METAFIELD_NAMESPACE", "volume_discount")
METAFIELD_KEY = os.getenv("METAFIELD_KEY", "rules")


def get_db_ref():
    """Root DB reference, initializing the Firebase app on first use."""
    if not firebase_admin._apps:
        try:
            cred = credentials.Certificate(FIREBASE_CRED_PATH)
            firebase_admin.initialize_app(cred, {
                'databaseURL': FIREBASE_DB_URL
            })
        except Exception as e:
            raise RuntimeError(f"Firebase initialization failed: {e}") from e

    return db.reference("/")


def fetch_metafield_value(namespace: str = METAFIELD_NAMESPACE, key: str = METAFIELD_KEY) -> Optional[str]:
    """
    Read the serialized configuration stored at metafields/<namespace>/<key>.

    Returns None when nothing is stored or the store cannot be reached; the
    caller then treats the configuration as absent.
    """
    try:
        value = get_db_ref().child("metafields").child(namespace).child(key).get()
    except Exception as e:
        logger.warning("Error reading metafield '%s/%s': %s", namespace, key, e)
        return None

    if value is None:
        return None

    # Realtime Database may hold the config as a native JSON object
    if not isinstance(value, str):
        return json.dumps(value)

    return value
