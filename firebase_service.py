"""
Firebase service for Firestore documents and ID token verification.
"""
from __future__ import annotations

import os
import json
import logging
from typing import List, Dict, Any, Iterable, Optional
from pathlib import Path
from dotenv import load_dotenv

import firebase_admin
from firebase_admin import auth, credentials, firestore

# Load environment variables
load_dotenv()
load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env", override=False)

logger = logging.getLogger(__name__)

# Env vars holding the service account JSON itself, in priority order
CREDENTIAL_JSON_ENV_VARS = ["FIREBASE_SERVICE_ACCOUNT", "GOOGLE_APPLICATION_CREDENTIALS_JSON"]


def load_service_account_json(raw: str) -> Dict[str, Any]:
    """
    Parse a service account JSON string from the environment.

    Hosting dashboards often store the private key with literal "\\n"
    sequences; those are turned back into newlines.
    """
    try:
        cred_dict = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid service account JSON: {str(e)}")

    private_key = cred_dict.get("private_key")
    if isinstance(private_key, str):
        cred_dict["private_key"] = private_key.replace("\\n", "\n")
    return cred_dict


class FirebaseService:
    """Service for reading and merging Firestore documents and verifying users."""

    def __init__(self, db=None, app=None):
        """
        Initialize Firebase Admin SDK.

        Args:
            db: Optional Firestore client (skips SDK initialization when given)
            app: Optional firebase_admin App used for token verification
        """
        if db is not None:
            self._app = app
            self._db = db
            return

        logger.info("[Firebase] Initializing FirebaseService...")
        self._app = app or self._initialize_firebase()
        self._db = firestore.client(app=self._app)
        logger.info("[Firebase] Firestore client created")

    def _initialize_firebase(self):
        """
        Initialize Firebase Admin SDK with credentials from environment variables.

        Priority:
        1. FIREBASE_SERVICE_ACCOUNT / GOOGLE_APPLICATION_CREDENTIALS_JSON (JSON string)
        2. GOOGLE_APPLICATION_CREDENTIALS (file path to JSON file)
        3. FIREBASE_PROJECT_ID (for Application Default Credentials)
        """
        try:
            app = firebase_admin.get_app()
            logger.info("[Firebase] Firebase already initialized")
            return app
        except ValueError:
            pass

        try:
            for env_var in CREDENTIAL_JSON_ENV_VARS:
                firebase_json = os.getenv(env_var)
                if firebase_json:
                    logger.info(f"[Firebase] Using service account JSON from {env_var}")
                    cred = credentials.Certificate(load_service_account_json(firebase_json))
                    return firebase_admin.initialize_app(cred)

            service_account_path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
            if service_account_path:
                if not os.path.exists(service_account_path):
                    raise FileNotFoundError(f"Service account file not found: {service_account_path}")
                logger.info(f"[Firebase] Using service account file: {service_account_path}")
                cred = credentials.Certificate(service_account_path)
                return firebase_admin.initialize_app(cred)

            project_id = os.getenv("FIREBASE_PROJECT_ID")
            if not project_id:
                raise ValueError(
                    "No Firebase credentials found. Please set one of:\n"
                    "  - FIREBASE_SERVICE_ACCOUNT or GOOGLE_APPLICATION_CREDENTIALS_JSON (JSON string)\n"
                    "  - GOOGLE_APPLICATION_CREDENTIALS (file path)\n"
                    "  - FIREBASE_PROJECT_ID (for Application Default Credentials)"
                )
            logger.info(f"[Firebase] Using project ID: {project_id}")
            return firebase_admin.initialize_app(options={"projectId": project_id})

        except Exception as e:
            if isinstance(e, (RuntimeError, ValueError, FileNotFoundError)):
                raise
            raise RuntimeError(f"Failed to initialize Firebase: {str(e)}")

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one document.

        Returns:
            Document dictionary or None if not found
        """
        try:
            doc = self._db.collection(collection).document(doc_id).get()
        except Exception as e:
            raise RuntimeError(f"Failed to fetch {collection}/{doc_id}: {str(e)}")

        if not doc.exists:
            return None
        return doc.to_dict() or {}

    def list(self, collection: str) -> List[Dict[str, Any]]:
        """
        Fetch every document of a collection.

        Returns:
            List of documents, each with its document ID under "id"
        """
        try:
            return [{"id": doc.id, **(doc.to_dict() or {})} for doc in self._db.collection(collection).stream()]
        except Exception as e:
            raise RuntimeError(f"Failed to fetch {collection}: {str(e)}")

    def merge(
        self,
        collection: str,
        doc_id: str,
        data: Dict[str, Any],
        union_fields: Iterable[str] = (),
    ) -> None:
        """
        Merge fields into a document, creating it if needed.

        Array fields named in union_fields are written with ArrayUnion, so
        concurrent writers only ever add elements.
        """
        union_fields = set(union_fields)
        payload = {
            key: firestore.ArrayUnion(list(value)) if key in union_fields else value
            for key, value in data.items()
        }
        try:
            self._db.collection(collection).document(doc_id).set(payload, merge=True)
            logger.info(f"[Firebase] Merged {sorted(data)} into {collection}/{doc_id}")
        except Exception as e:
            raise RuntimeError(f"Failed to update {collection}/{doc_id}: {str(e)}")

    def verify_id_token(self, token: str) -> str:
        """
        Verify a Firebase ID token.

        Returns:
            The user ID (uid) the token was issued to

        Raises:
            firebase_admin.auth errors or ValueError for invalid tokens
        """
        decoded = auth.verify_id_token(token, app=self._app)
        return decoded["uid"]


# Singleton instance
_firebase_service: Optional[FirebaseService] = None


def get_firebase_service() -> FirebaseService:
    """Get or create the Firebase service instance."""
    global _firebase_service
    if _firebase_service is None:
        _firebase_service = FirebaseService()
    return _firebase_service
