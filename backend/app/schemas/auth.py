# 文件位置: backend/app/schemas/auth.py
from pydantic import BaseModel, Field, field_validator


class RequestBody(BaseModel):
    # 未传或传 null 的字段都按空字符串处理，交给接口里做非空校验
    @field_validator("*", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return "" if value is None else value


# 1. 账号密码登录
class LoginRequest(RequestBody):
    account: str = Field(default="", description="账号ID")
    password: str = Field(default="", description="密码")


# 2. 注册
class RegisterRequest(RequestBody):
    avatar: str = Field(default="", description="头像")
    id: str = Field(default="", description="账号ID")
    nickname: str = Field(default="", description="昵称")
    gender: str = Field(default="", description="性别")
    birthday: str = Field(default="", description="生日")
    email: str = Field(default="", description="邮箱")
    phone: str = Field(default="", description="手机号", examples=["13800138000"])
    password: str = Field(default="", description="密码")


# 3. 发送验证码
class SmsCodeRequest(RequestBody):
    command: str = Field(default="", description="smsLogin / register / resetPassword")
    email: str = Field(default="", description="接收验证码的邮箱")


# 4. 验证码登录
class SmsLoginRequest(RequestBody):
    email: str = Field(..., min_length=1, description="邮箱")


# 5. 重置密码
class ResetPasswordRequest(RequestBody):
    email: str = Field(default="", description="邮箱")
    password: str = Field(default="", description="新密码")


class BaseResponse(BaseModel):
    success: bool = True
    message: str


class TokenData(BaseModel):
    account: str
    token: str


class LoginResponse(BaseResponse):
    avatar: str
    nickname: str
    account_id: str
    data: TokenData


class SmsCodeResponse(BaseResponse):
    code: str


class SmsLoginResponse(BaseResponse):
    avatar: str
    nickname: str
    account_id: str


class AccountOut(BaseModel):
    account_id: str
    nickname: str
    avatar: str
    email: str
