from pydantic import BaseModel


class OAuthProviderEntity(BaseModel):
    """第三方授权提供商实体，映射的数据是providers.yaml里的每条记录"""
    name: str  # 名字，同时作为路由中的provider_name
    label: str  # 标签、展示给前端显示的
    description: str = ""  # 描述
    module: str  # 策略所在的模块
    strategy: str  # 策略类名
    default_scope: str  # 默认授权范围
    uid_field: str  # 默认的uid字段
