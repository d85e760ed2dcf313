from fastapi import Header, HTTPException, status


def get_optional_user_id(x_user_id: str | None = Header(None, alias="X-User-Id")) -> str | None:
    # La cabecera la pone la pasarela de autenticación que va delante del backend
    if not x_user_id or not x_user_id.strip():
        return None
    return x_user_id.strip()


def get_current_user_id(x_user_id: str | None = Header(None, alias="X-User-Id")) -> str:
    user_id = get_optional_user_id(x_user_id)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error_code": "NOT_AUTHENTICATED",
                "message": "Usuario no autenticado",
            },
        )
    return user_id
