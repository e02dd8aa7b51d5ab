from fastapi import APIRouter, Body

from backend.auth import jwt_handler

router = APIRouter(tags=['auth'])


@router.post('/jwt')
def issue_token(claims: dict = Body(...)):
    token = jwt_handler.create_access_token(claims)
    return {'token': token}
