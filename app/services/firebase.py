import os
import json
import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, initialize_app

logger = logging.getLogger(__name__)


class FirebaseService:
    """Holds the Firebase Admin app used to verify identity tokens."""

    def __init__(self):
        self.app: Optional[firebase_admin.App] = None

    def initialize(self) -> bool:
        """Initialize Firebase Admin from FIREBASE_CONFIG or FIREBASE_CONFIG_PATH"""
        if self.app is not None:
            return True

        try:
            firebase_config = os.getenv("FIREBASE_CONFIG")

            if not firebase_config:
                firebase_config_path = os.getenv(
                    "FIREBASE_CONFIG_PATH", "firebase-admin.json"
                )
                if not os.path.exists(firebase_config_path):
                    logger.warning(
                        f"FIREBASE_CONFIG not set and service account file "
                        f"{firebase_config_path} not found"
                    )
                    return False
                logger.info(f"Loading Firebase config from file: {firebase_config_path}")
                with open(firebase_config_path, "r") as f:
                    config_dict = json.load(f)
            else:
                config_dict = json.loads(firebase_config)

            cred = credentials.Certificate(config_dict)
            self.app = initialize_app(cred)
            logger.info("Firebase Admin initialized successfully")
            return True

        except (ValueError, OSError) as e:
            logger.error(f"Failed to initialize Firebase Admin SDK: {e}")
            self.app = None
            return False

    def is_configured(self) -> bool:
        return self.app is not None


# Global Firebase service instance
firebase_service = FirebaseService()
