from pydantic import BaseModel

class UserSchema(BaseModel):
    """Body of the signin and update requests. All three fields are required."""
    name: str
    email: str
    password: str
