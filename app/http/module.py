from injector import Module, Binder, Injector, singleton

from internal.core.oauth import OAuthManager


class ExtensionModule(Module):
    """扩展模块的依赖注入"""

    def configure(self, binder: Binder) -> None:
        binder.bind(OAuthManager, to=OAuthManager, scope=singleton)


injector = Injector([ExtensionModule])
