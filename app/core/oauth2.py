from fastapi.security import HTTPBearer

# Reads "Authorization: Bearer <token>"; auto_error is off so the
# envelope-shaped 401 comes from get_current_user
bearer_scheme = HTTPBearer(auto_error=False)
