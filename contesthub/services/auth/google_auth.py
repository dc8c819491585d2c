from google.oauth2 import id_token
from google.auth.transport import requests
from typing import Optional, Dict

from contesthub.core import config


class GoogleAuthService:
    """Service for Google OAuth authentication"""
    
    def __init__(self, client_id: Optional[str] = None):
        self.client_id = client_id or config.GOOGLE_CLIENT_ID
    
    async def verify_google_token(self, token: str) -> Optional[Dict]:
        """Verify Google ID token and return user info"""
        try:
            idinfo = id_token.verify_oauth2_token(
                token,
                requests.Request(),
                self.client_id
            )
        except ValueError as e:
            # Invalid or expired token
            print(f"[WARN] Google token verification failed: {e}")
            return None
        
        if idinfo.get("iss") not in ["accounts.google.com", "https://accounts.google.com"]:
            return None
        
        return {
            "email": idinfo.get("email"),
            "name": idinfo.get("name"),
            "picture": idinfo.get("picture")
        }


google_auth_service = GoogleAuthService()
