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
"""Invocation metadata extractor.

:func:`describe` runs once, when a method is decorated, and records the
declaring type, the method name and the ordered parameter markers.
:func:`extract` runs per call and aligns the actual argument values with
that metadata. Positional placeholders are never invented: if names, markers
and values cannot be aligned the call's metadata is unavailable.
"""

from __future__ import annotations

import inspect
import re
import typing
from collections.abc import Callable
from typing import Any

from aspectlog.interceptor.formatter import CLASS_KEY, METHOD_KEY
from aspectlog.interceptor.params import is_log_parameter
from aspectlog.interceptor.types import (
    InvocationArgument,
    InvocationContext,
    MethodSignature,
    ParameterSpec,
)
from aspectlog.kernel.exceptions import InvalidLogConfigException, MetadataUnavailableException

_RECEIVER_NAMES = frozenset({"self", "cls"})
_MARKER_TEXT_RE = re.compile(r"\bLogParameter\b")
_RESERVED_KEYS = frozenset({CLASS_KEY, METHOD_KEY})


def _owner_from_qualname(fn: Callable[..., Any]) -> str | None:
    parts = getattr(fn, "__qualname__", "").split(".")
    if len(parts) >= 2 and parts[-2] != "<locals>":
        return parts[-2]
    return None


def declaring_type_name(fn: Callable[..., Any]) -> str:
    """Simple name of the class that declares *fn*.

    ``Greeter.greet`` gives ``Greeter``; a function defined at module level
    (or inside another function) reports the last segment of its module.
    """
    owner = _owner_from_qualname(fn)
    if owner is not None:
        return owner
    module = getattr(fn, "__module__", None) or "<unknown>"
    return module.rsplit(".", 1)[-1]


def _is_marked_text(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return _MARKER_TEXT_RE.search(annotation) is not None
    return is_log_parameter(annotation)


def _marker_hints(fn: Callable[..., Any], sig: inspect.Signature) -> dict[str, bool]:
    try:
        hints = typing.get_type_hints(fn, include_extras=True)
    except (NameError, TypeError, AttributeError, SyntaxError):
        # Unresolvable forward references: match the marker textually instead.
        return {name: _is_marked_text(param.annotation) for name, param in sig.parameters.items()}
    return {name: is_log_parameter(hints.get(name)) for name in sig.parameters}


def describe(fn: Callable[..., Any], type_name: str | None = None) -> MethodSignature:
    """Capture the registration-time metadata of *fn*.

    The receiver (``self``/``cls``) of a function declared in a class body
    is not a logged parameter and is left out. Bound methods have already
    dropped it from their signature.

    Raises:
        InvalidLogConfigException: a marked parameter is named like one of
            the identity keys (``method``) and would shadow it in the record.
    """
    owner = type_name or declaring_type_name(fn)
    method_name = getattr(fn, "__name__", "<unknown>")

    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return MethodSignature(type_name=owner, method_name=method_name)

    params = list(sig.parameters.values())
    has_receiver = (
        not inspect.ismethod(fn)
        and _owner_from_qualname(fn) is not None
        and bool(params)
        and params[0].name in _RECEIVER_NAMES
        and params[0].kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    )

    markers = _marker_hints(fn, sig)
    specs = tuple(
        ParameterSpec(name=p.name, marked=markers.get(p.name, False), kind=p.kind)
        for p in (params[1:] if has_receiver else params)
    )
    reserved = [spec.name for spec in specs if spec.marked and spec.name in _RESERVED_KEYS]
    if reserved:
        raise InvalidLogConfigException(
            f"Marked parameter '{reserved[0]}' of {owner}.{method_name} collides with an identity key",
            code="RESERVED_PARAMETER_NAME",
            context={"parameter": reserved[0]},
        )
    return MethodSignature(
        type_name=owner,
        method_name=method_name,
        parameters=specs,
        signature=sig,
        has_receiver=has_receiver,
    )


def extract(method: MethodSignature, args: tuple, kwargs: dict[str, Any]) -> InvocationContext:
    """Align the actual arguments of one call with *method*'s parameters.

    Raises:
        MetadataUnavailableException: the signature could not be captured,
            the arguments do not bind to it, or the aligned lists differ.
    """
    if method.signature is None:
        raise MetadataUnavailableException(
            f"No parameter metadata for {method.type_name}.{method.method_name}",
            code="METADATA_UNAVAILABLE",
            context={"class": method.type_name, "method": method.method_name},
        )

    try:
        bound = method.signature.bind(*args, **kwargs)
    except TypeError as exc:
        raise MetadataUnavailableException(
            f"Arguments do not match {method.type_name}.{method.method_name}: {exc}",
            code="ARGUMENTS_UNBOUND",
            context={"class": method.type_name, "method": method.method_name},
        ) from exc
    bound.apply_defaults()

    values = list(bound.arguments.items())
    if method.has_receiver:
        values = values[1:]

    names = [name for name, _ in values]
    if names != [spec.name for spec in method.parameters]:
        raise MetadataUnavailableException(
            f"Parameter names of {method.type_name}.{method.method_name} are not aligned with its arguments",
            code="PARAMETERS_MISALIGNED",
            context={"expected": [spec.name for spec in method.parameters], "actual": names},
        )

    return InvocationContext(
        type_name=method.type_name,
        method_name=method.method_name,
        arguments=tuple(
            InvocationArgument(name=spec.name, marked=spec.marked, value=value)
            for spec, (_, value) in zip(method.parameters, values)
        ),
    )
