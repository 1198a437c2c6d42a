from typing import Annotated, Any

from fastapi import APIRouter, File, Form, UploadFile, status

from social_toolkit.api.dependencies import ToolkitDep
from social_toolkit.api.schemas import LoginRequest
from social_toolkit.schemas import LoginResult

router = APIRouter(prefix="/auth", tags=["auth"])


async def read_upload(upload: UploadFile | None) -> bytes | None:
    if upload is None:
        return None
    return await upload.read() or None


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    toolkit: ToolkitDep,
    username: Annotated[str | None, Form()] = None,
    email: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
    profile_pic: Annotated[UploadFile | None, File(alias="profilePic")] = None,
) -> dict[str, Any]:
    user = await toolkit.users.register(username, email, password, await read_upload(profile_pic))
    return {"message": "User registered successfully", "userId": user.id}


@router.post("/login")
async def login(toolkit: ToolkitDep, body: LoginRequest) -> LoginResult:
    return await toolkit.users.login(body.email, body.password)
