# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Weaver — wraps callables so the dispatcher sees every call.

The wrapper fires PRE, calls the original, then fires exactly one of
POST-SUCCESS or POST-FAILURE. The original's return value and exception
pass through unchanged.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any

from aspectlog.interceptor.dispatcher import InterceptionDispatcher, get_dispatcher
from aspectlog.interceptor.extractor import describe
from aspectlog.interceptor.types import JoinPoint, LogConfig, MethodSignature

LOGGABLE_ATTR = "__aspectlog_loggable__"
METHOD_ATTR = "__aspectlog_method__"


def build_wrapper(
    original: Callable[..., Any],
    method: MethodSignature,
    config: LogConfig,
    dispatcher: InterceptionDispatcher | None = None,
) -> Callable[..., Any]:
    """Wrap *original*; coroutine functions get an async wrapper.

    When *dispatcher* is ``None`` the process default is looked up on every
    call, so it can be replaced after decoration.
    """
    if inspect.iscoroutinefunction(original):
        wrapper = _build_async_wrapper(original, method, config, dispatcher)
    else:
        wrapper = _build_sync_wrapper(original, method, config, dispatcher)

    setattr(wrapper, LOGGABLE_ATTR, config)
    setattr(wrapper, METHOD_ATTR, method)
    return wrapper


def _build_async_wrapper(
    original: Callable[..., Any],
    method: MethodSignature,
    config: LogConfig,
    dispatcher: InterceptionDispatcher | None,
) -> Callable[..., Any]:
    @functools.wraps(original)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        active = dispatcher if dispatcher is not None else get_dispatcher()
        jp = JoinPoint(method=method, config=config, args=args, kwargs=kwargs)

        active.before(jp)
        try:
            result = await original(*args, **kwargs)
        except Exception as exc:
            jp.exception = exc
            active.after_throwing(jp)
            raise

        jp.return_value = result
        active.after_returning(jp)
        return result

    return wrapper


def _build_sync_wrapper(
    original: Callable[..., Any],
    method: MethodSignature,
    config: LogConfig,
    dispatcher: InterceptionDispatcher | None,
) -> Callable[..., Any]:
    @functools.wraps(original)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        active = dispatcher if dispatcher is not None else get_dispatcher()
        jp = JoinPoint(method=method, config=config, args=args, kwargs=kwargs)

        active.before(jp)
        try:
            result = original(*args, **kwargs)
        except Exception as exc:
            jp.exception = exc
            active.after_throwing(jp)
            raise

        jp.return_value = result
        active.after_returning(jp)
        return result

    return wrapper


def is_instrumented(fn: Any) -> bool:
    return getattr(fn, LOGGABLE_ATTR, None) is not None


def weave_bean(
    bean: Any,
    config: LogConfig | None = None,
    dispatcher: InterceptionDispatcher | None = None,
) -> list[str]:
    """Instrument the public methods of an existing instance.

    For objects whose class cannot carry ``@loggable`` (third-party code).
    Every public bound method gets *config*; names starting with ``_`` and
    methods already instrumented by ``@loggable`` are left alone. The
    wrappers are set on the instance, so the class is not modified.

    Returns:
        The names of the methods that were woven, sorted.
    """
    config = config or LogConfig()
    type_name = type(bean).__name__
    woven: list[str] = []

    for attr_name in dir(bean):
        if attr_name.startswith("_"):
            continue
        attr = getattr(bean, attr_name, None)
        if not inspect.ismethod(attr) or is_instrumented(attr):
            continue

        method = describe(attr, type_name=type_name)
        setattr(bean, attr_name, build_wrapper(attr, method, config, dispatcher))
        woven.append(attr_name)

    return woven
