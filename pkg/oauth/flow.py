import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator

from .entities import FlowContext, FlowState, FlowStateError
from .oauth import OAuthStrategy

logger = logging.getLogger(__name__)

# 允许的状态跳转，cleanup统一回到IDLE
_TRANSITIONS = {
    FlowState.IDLE: {FlowState.AWAITING_CALLBACK},
    FlowState.AWAITING_CALLBACK: {FlowState.SUCCESS, FlowState.FAILED, FlowState.IDLE},
    FlowState.SUCCESS: {FlowState.IDLE},
    FlowState.FAILED: {FlowState.IDLE},
}


@dataclass
class OAuthFlow:
    """授权码流程编排器

    Idle --request--> AwaitingCallback --callback--> Success/Failed --cleanup--> Idle

    编排器本身不保存任何请求状态，单次请求的进度全部记录在FlowContext中，
    因此同一个OAuthFlow可以被多个线程同时使用。
    """
    strategy: OAuthStrategy

    @property
    def provider(self) -> str:
        return self.strategy.get_provider()

    def request(self, ctx: FlowContext) -> FlowContext:
        """请求阶段，只构建授权地址，不发起网络请求"""
        self._transition(ctx, FlowState.AWAITING_CALLBACK)
        self.strategy.handle_request(ctx)
        return ctx

    def callback(self, ctx: FlowContext) -> FlowContext:
        """回调阶段，依次执行换取令牌、获取用户信息、标准化，任一步失败即终止"""
        if ctx.state != FlowState.AWAITING_CALLBACK:
            raise FlowStateError(f"回调阶段要求状态为awaiting_callback, 当前状态: {ctx.state.value}")

        self.strategy.handle_callback(ctx)

        if ctx.failed or ctx.identity is None:
            logger.warning(
                "%s授权回调失败: %s",
                self.provider,
                ", ".join(f"{error.code}({error.message})" for error in ctx.errors),
            )
            self._transition(ctx, FlowState.FAILED)
        else:
            self._transition(ctx, FlowState.SUCCESS)
        return ctx

    def cleanup(self, ctx: FlowContext) -> FlowContext:
        """清理阶段，丢弃令牌与用户信息等临时数据"""
        if ctx.state == FlowState.IDLE:
            raise FlowStateError("授权流程未开始或已清理")
        self.strategy.handle_cleanup(ctx)
        self._transition(ctx, FlowState.IDLE)
        return ctx

    @contextmanager
    def scoped(self, ctx: FlowContext) -> Generator[FlowContext, None, None]:
        """保证无论成功失败，清理阶段都只执行一次"""
        try:
            yield ctx
        finally:
            if ctx.state != FlowState.IDLE:
                self.cleanup(ctx)

    @classmethod
    def _transition(cls, ctx: FlowContext, target: FlowState) -> None:
        if target not in _TRANSITIONS[ctx.state]:
            raise FlowStateError(f"非法的状态跳转: {ctx.state.value} -> {target.value}")
        ctx.state = target
