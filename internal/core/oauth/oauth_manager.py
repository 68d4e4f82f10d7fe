import logging
import os.path
from dataclasses import dataclass, field

import yaml
from flask import Flask
from injector import singleton

from internal.exception import NotFoundException
from internal.lib.helper import dynamic_import
from pkg.oauth import OAuth2Client, OAuthConfigError, OAuthFlow, FlowOptions
from .oauth_entity import OAuthProviderEntity


@singleton
@dataclass
class OAuthManager:
    """第三方授权提供商管理器，启动时根据配置构建每个提供商的授权流程，运行期间只读"""
    provider_entity_map: dict[str, OAuthProviderEntity] = field(default_factory=dict)
    flow_map: dict[str, OAuthFlow] = field(default_factory=dict)

    def __post_init__(self):
        self._load_provider_entities()

    def init_app(self, app: Flask):
        """根据应用配置构建启用的提供商，凭证缺失时直接抛出配置错误阻止应用启动"""
        timeout = float(app.config.get("OAUTH_HTTP_TIMEOUT", 10))
        flow_map = {}

        for provider_name in app.config.get("OAUTH_PROVIDERS", []):
            # 1.只允许providers.yaml中声明过的提供商
            provider_entity = self.provider_entity_map.get(provider_name)
            if provider_entity is None:
                raise OAuthConfigError(f"未知的第三方授权提供商: {provider_name}")

            # 2.读取提供商凭证与流程配置
            prefix = provider_name.upper()
            strategy_class = dynamic_import(provider_entity.module, provider_entity.strategy)
            config = strategy_class.build_config(
                client_id=app.config.get(f"{prefix}_CLIENT_ID"),
                client_secret=app.config.get(f"{prefix}_CLIENT_SECRET"),
            )
            options = FlowOptions(
                default_scope=app.config.get(f"{prefix}_DEFAULT_SCOPE") or provider_entity.default_scope,
                uid_field=app.config.get(f"{prefix}_UID_FIELD") or provider_entity.uid_field,
                redirect_uri=app.config.get(f"{prefix}_REDIRECT_URI") or "",
            )

            # 3.客户端在每个请求线程中各自创建http会话
            client = OAuth2Client(config=config, timeout=timeout)
            flow_map[provider_name] = OAuthFlow(strategy=strategy_class(config=config, options=options, client=client))
            logging.info("第三方授权提供商%s初始化完成, uid_field=%s", provider_name, options.uid_field)

        self.flow_map = flow_map
        app.extensions["oauth"] = self

    def get_flow(self, provider_name: str) -> OAuthFlow:
        """根据提供商名字获取授权流程"""
        flow = self.flow_map.get(provider_name)
        if flow is None:
            raise NotFoundException("未找到对应的授权认证服务")
        return flow

    def get_provider_entities(self) -> list[OAuthProviderEntity]:
        """获取所有已启用的提供商实体"""
        return [self.provider_entity_map[provider_name] for provider_name in self.flow_map]

    def _load_provider_entities(self):
        """读取providers.yaml并填充provider_entity_map"""
        if self.provider_entity_map:
            return

        current_path = os.path.abspath(__file__)
        providers_yaml_path = os.path.join(os.path.dirname(current_path), "providers.yaml")
        with open(providers_yaml_path, encoding="utf-8") as f:
            providers_yaml_data = yaml.safe_load(f)

        for provider_data in providers_yaml_data:
            provider_entity = OAuthProviderEntity(**provider_data)
            self.provider_entity_map[provider_entity.name] = provider_entity
