from dataclasses import asdict

from flask_wtf import FlaskForm
from marshmallow import Schema, fields, pre_dump
from wtforms import StringField
from wtforms.validators import DataRequired, Optional, Length

from internal.service import CallbackResult
from pkg.oauth import Credentials


class AuthorizationReq(FlaskForm):
    """跳转第三方授权页请求"""
    scope = StringField("scope", validators=[
        Optional(),
        Length(max=255, message="授权范围长度不能超过255"),
    ])
    state = StringField("state", validators=[
        Optional(),
        Length(max=512, message="state长度不能超过512"),
    ])


class CallbackReq(FlaskForm):
    """第三方授权回调请求，code缺失由授权流程返回missing_code错误"""
    code = StringField("code", validators=[Optional()])
    state = StringField("state", validators=[Optional()])


class RefreshTokenReq(FlaskForm):
    """刷新授权令牌请求"""
    refresh_token = StringField("refresh_token", validators=[
        DataRequired("refresh_token不能为空"),
    ])


class CredentialsResp(Schema):
    """授权凭证响应结构"""
    token = fields.String(allow_none=True)
    refresh_token = fields.String(allow_none=True)
    expires_at = fields.Integer(allow_none=True)
    token_type = fields.String(allow_none=True)
    expires = fields.Boolean(dump_default=False)
    scopes = fields.List(fields.String(), dump_default=[])

    @pre_dump
    def process_data(self, data: Credentials, **kwargs):
        return asdict(data)


class OAuthIdentityResp(Schema):
    """第三方授权成功后的标准化身份响应结构"""
    provider = fields.String(dump_default="")
    uid = fields.String(dump_default="")
    info = fields.Dict(dump_default={})
    credentials = fields.Nested(CredentialsResp)
    extra = fields.Dict(dump_default={})
    state = fields.String(allow_none=True)

    @pre_dump
    def process_data(self, data: CallbackResult, **kwargs):
        identity = data.identity
        return {
            "provider": identity.provider,
            "uid": identity.uid,
            "info": asdict(identity.info),
            "credentials": identity.credentials,
            "extra": {
                "raw_token": asdict(identity.extra.raw_token),
                "raw_profile": identity.extra.raw_profile.fields,
            },
            "state": data.state,
        }
