import dotenv

from config import Config
from internal.core.oauth import OAuthManager
from internal.router import Router
from internal.server import Http
from .module import injector

# 1.将env加载到环境变量中
dotenv.load_dotenv()

# 2.构建项目配置
conf = Config()

app = Http(
    __name__,
    conf=conf,
    oauth_manager=injector.get(OAuthManager),
    router=injector.get(Router),
)

if __name__ == "__main__":
    app.run(debug=True)
