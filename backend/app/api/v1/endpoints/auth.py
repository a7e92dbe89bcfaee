# 文件位置: backend/app/api/v1/endpoints/auth.py
import logging

from fastapi import APIRouter, Depends

from app.core.deps import get_account_store, get_code_issuer, get_current_account, json_body
from app.core.errors import AuthError, NotFoundError, ValidationError
from app.core.security import hash_password, issue_access_token, verify_password
from app.core.validators import is_valid_email, is_valid_phone
from app.models.account import AccountInfo
from app.schemas.auth import (
    AccountOut,
    BaseResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    ResetPasswordRequest,
    SmsCodeRequest,
    SmsCodeResponse,
    SmsLoginRequest,
    SmsLoginResponse,
    TokenData,
)
from app.services.account_store import AccountStore
from app.services.code_issuer import SUCCESS_MESSAGES, CodeIssuer, CodePurpose

logger = logging.getLogger(__name__)

router = APIRouter()

_DUMMY_PASSWORD_HASH = hash_password("talkhive-no-such-account")


@router.post("/login", response_model=LoginResponse, summary="登录（账号密码）")
def login(
    payload: LoginRequest = Depends(json_body(LoginRequest, "Json输入格式错误")),
    accounts: AccountStore = Depends(get_account_store),
):
    account = accounts.find_by_id(payload.account) if payload.account else None
    # 账号不存在时也跑一次哈希，响应时间不暴露账号是否存在
    if account is None:
        verify_password(payload.password, _DUMMY_PASSWORD_HASH)
        raise AuthError("账号名称或密码错误")
    if not verify_password(payload.password, account.password):
        raise AuthError("账号名称或密码错误")

    token = issue_access_token(account.id)
    return LoginResponse(
        message="登录成功",
        avatar=account.avatar,
        nickname=account.nickname,
        account_id=account.id,
        data=TokenData(account=account.id, token=token),
    )


@router.post("/register", response_model=BaseResponse, summary="注册")
def register(
    payload: RegisterRequest = Depends(json_body(RegisterRequest, "Json解析失败")),
    accounts: AccountStore = Depends(get_account_store),
):
    if not all((payload.id, payload.nickname, payload.email, payload.password, payload.phone)):
        raise ValidationError("数据不能为空")
    if not is_valid_phone(payload.phone):
        raise ValidationError("电话号码格式不对")
    if not is_valid_email(payload.email):
        raise ValidationError("邮箱格式不正确")

    accounts.create(
        AccountInfo(
            avatar=payload.avatar,
            id=payload.id,
            nickname=payload.nickname,
            gender=payload.gender,
            birthday=payload.birthday,
            email=payload.email,
            phone=payload.phone,
            password=hash_password(payload.password),
            friend_permission_id=True,
            friend_permission_nickname=True,
            deactivate=False,
        )
    )
    return BaseResponse(message="注册成功")


@router.post("/sms-code", response_model=SmsCodeResponse, summary="发送邮箱验证码")
def send_sms_code(
    payload: SmsCodeRequest = Depends(json_body(SmsCodeRequest, "Json输入格式有误")),
    issuer: CodeIssuer = Depends(get_code_issuer),
):
    code = issuer.issue_code(payload.email, payload.command)
    # 验证码同时返回给前端
    return SmsCodeResponse(message=SUCCESS_MESSAGES[CodePurpose(payload.command)], code=code)


@router.post("/sms-login", response_model=SmsLoginResponse, summary="登录（邮箱验证码）")
def sms_login(
    payload: SmsLoginRequest = Depends(json_body(SmsLoginRequest, "无法解析Json")),
    accounts: AccountStore = Depends(get_account_store),
):
    account = accounts.find_by_email(payload.email)
    if account is None:
        raise NotFoundError("用户未找到")
    if account.deactivate:
        raise AuthError("该账号已经注销")

    return SmsLoginResponse(
        message="登录成功",
        avatar=account.avatar,
        nickname=account.nickname,
        account_id=account.id,
    )


@router.post("/reset-password", response_model=BaseResponse, summary="重置密码")
def reset_password(
    payload: ResetPasswordRequest = Depends(json_body(ResetPasswordRequest, "Json解析失败")),
    accounts: AccountStore = Depends(get_account_store),
):
    account = accounts.find_by_email(payload.email) if payload.email else None
    if account is None:
        raise NotFoundError("该邮箱未注册")
    if not payload.password:
        raise ValidationError("密码不能为空")

    account.password = hash_password(payload.password)
    accounts.save(account, error_message="密码更新失败")
    logger.info("password reset: id=%s", account.id)
    return BaseResponse(message="密码重置成功")


@router.get("/me", response_model=AccountOut, summary="获取当前账号")
def get_me(current_account: AccountInfo = Depends(get_current_account)):
    return AccountOut(
        account_id=current_account.id,
        nickname=current_account.nickname,
        avatar=current_account.avatar,
        email=current_account.email,
    )
