"""Glowline design session - one prompt's path from text to device.

The session holds the installation, app configuration and current intent,
and wires the pipeline stages together:

- parse: prompt to intent, solver ambiguities merged in
- questions / answer: clarification round trips
- compile: lowering and payload encoding
- send / save / load: device delivery and persistence

Every stage is pure; the session only keeps the latest result.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from glowline.core.clarification import apply_clarifications, build_questions
from glowline.core.clarification.apply import Answer
from glowline.core.config.loader import load_roofline
from glowline.core.config.models import AppConfig, ConfigBase
from glowline.core.encoding import to_segment_payload
from glowline.core.lowering import CompositionResult, PatternComposer
from glowline.core.models import (
    AmbiguityFlag,
    ClarificationQuestion,
    ConstraintValidationResult,
    DesignIntent,
    RooflineConfiguration,
)
from glowline.core.parsing import parse_intent
from glowline.core.persistence import DesignRepository, InMemoryDesignRepository, SavedDesign
from glowline.core.solver import ConstraintSolver
from glowline.core.transport import DeviceTransport
from glowline.core.vocabulary import WledEffect

T = TypeVar("T", bound=ConfigBase)

logger = logging.getLogger(__name__)


class PayloadFormat(str, Enum):
    """Which device payload ``compile`` produces."""

    AUTO = "auto"
    INDIVIDUAL = "individual"
    SEGMENT = "segment"


def _merge_ambiguities(
    existing: list[AmbiguityFlag], raised: list[AmbiguityFlag]
) -> list[AmbiguityFlag]:
    """Append raised flags not already open for the same layer and type."""
    seen = {(a.type, a.affected_layer_id) for a in existing}
    merged = list(existing)
    for ambiguity in raised:
        key = (ambiguity.type, ambiguity.affected_layer_id)
        if key not in seen:
            seen.add(key)
            merged.append(ambiguity)
    return merged


class DesignSession:
    """Session coordinator for one roofline.

    Args:
        roofline: Installation being designed for.
        app_config: AppConfig instance, path, or None (default path).
        repository: Design storage; in-memory when omitted.
        transport: Controller transport used by :meth:`send`.
        user_id: Owner of designs saved through this session.

    Example:
        >>> session = DesignSession(roofline)
        >>> session.parse("warm white on peaks")
        >>> result = session.compile()
    """

    def __init__(
        self,
        roofline: RooflineConfiguration,
        *,
        app_config: AppConfig | Path | str | None = None,
        repository: DesignRepository | None = None,
        transport: DeviceTransport | None = None,
        user_id: str = "local",
    ):
        self.roofline = roofline
        self.app_config: AppConfig = self._resolve_config(app_config, AppConfig)
        self.repository: DesignRepository = repository or InMemoryDesignRepository()
        self.transport = transport
        self.user_id = user_id
        self.solver = ConstraintSolver(self.app_config.solver)
        self.composer = PatternComposer(rgbw=self.app_config.device.rgbw)

        self._intent: DesignIntent | None = None
        self._questions: list[ClarificationQuestion] = []
        self._last_result: CompositionResult | None = None

        logger.debug(
            "Session initialized: roofline=%s, pixels=%d",
            roofline.id,
            roofline.total_pixel_count,
        )

    @staticmethod
    def _resolve_config(value: Any, config_cls: type[T]) -> T:
        """Resolve config from value, path, or default.

        Raises:
            TypeError: If value is wrong type.
            ValidationError: If config is invalid.
        """
        if value is None:
            return config_cls.load_or_default()
        elif isinstance(value, (Path, str)):
            return config_cls.load_or_default(Path(value))
        elif isinstance(value, config_cls):
            return value
        else:
            raise TypeError(
                f"Expected {config_cls.__name__}, Path, str, or None; got {type(value).__name__}"
            )

    @classmethod
    def from_files(
        cls,
        roofline_path: Path | str,
        config_path: Path | str | None = None,
        **kwargs: Any,
    ) -> DesignSession:
        """Create a session from a roofline file and optional config file.

        Raises:
            FileNotFoundError: If the roofline file does not exist.
            ValueError: If a file cannot be parsed.
            ValidationError: If a file's content is invalid.
        """
        return cls(load_roofline(roofline_path), app_config=config_path, **kwargs)

    # ===================================================================
    # State
    # ===================================================================

    @property
    def intent(self) -> DesignIntent:
        if self._intent is None:
            raise ValueError("No design parsed yet; call parse() first")
        return self._intent

    @property
    def questions(self) -> list[ClarificationQuestion]:
        """Open questions for the current intent, in asking order."""
        return list(self._questions)

    @property
    def is_ready(self) -> bool:
        """True once the current intent has no open ambiguities."""
        return self._intent is not None and not self._intent.ambiguities

    @property
    def last_result(self) -> CompositionResult | None:
        return self._last_result

    def _set_intent(self, intent: DesignIntent) -> DesignIntent:
        validation = self.solver.validate(intent, self.roofline)
        intent = intent.model_copy(
            update={"ambiguities": _merge_ambiguities(intent.ambiguities, validation.ambiguities)}
        )
        self._intent = intent
        self._questions = build_questions(
            intent.ambiguities, intent, self.roofline, self.app_config.solver
        )
        self._last_result = None
        return intent

    # ===================================================================
    # Pipeline
    # ===================================================================

    def parse(self, text: str) -> DesignIntent:
        """Parse ``text`` and validate it against the roofline.

        Solver ambiguities (e.g. impossible spacing) are merged into the
        returned intent, and :attr:`questions` is rebuilt.
        """
        intent = parse_intent(text, self.roofline, self.app_config.parser)
        settings = intent.global_settings.model_copy(
            update={"brightness": self.app_config.device.brightness}
        )
        intent = self._set_intent(intent.model_copy(update={"global_settings": settings}))
        logger.info(
            "Parsed %d layer(s), %d open question(s)",
            len(intent.layers),
            len(self._questions),
        )
        return intent

    def validate(self) -> ConstraintValidationResult:
        """Run the solver over the current intent."""
        return self.solver.validate(self.intent, self.roofline)

    def answer(self, answers: Mapping[str, Answer]) -> DesignIntent:
        """Apply answers to the open questions and re-validate.

        Args:
            answers: Question id to option (or option id).
        """
        intent = apply_clarifications(self.intent, answers, self._questions)
        return self._set_intent(intent)

    def load_intent(self, intent: DesignIntent) -> DesignIntent:
        """Adopt an externally built intent (e.g. from storage)."""
        return self._set_intent(intent)

    def compile(
        self, payload_format: PayloadFormat | str = PayloadFormat.AUTO
    ) -> CompositionResult:
        """Lower the current intent to pixel groups and a device payload.

        Args:
            payload_format: ``auto`` picks a segment payload only when a
                layer runs a device effect; ``individual`` and ``segment``
                force one form.

        Returns:
            The composition result; failures are values, never raised.
        """
        payload_format = PayloadFormat(payload_format)
        result = self.composer.compose(self.intent, self.roofline)
        if result.success and payload_format is PayloadFormat.SEGMENT:
            result = result.model_copy(update={"payload": self._segment_payload(result)})
        elif result.success and payload_format is PayloadFormat.INDIVIDUAL:
            result = result.model_copy(
                update={
                    "payload": self.composer.build_payload(
                        result.groups, self.intent, None, self.roofline.total_pixel_count
                    )
                }
            )
        self._last_result = result
        if not result.success:
            logger.warning("Compilation failed: %s", result.error)
        return result

    def _segment_payload(self, result: CompositionResult) -> dict[str, Any]:
        intent = self.intent
        motion = next(
            (layer.motion for layer in intent.layers if layer.enabled and layer.motion is not None),
            None,
        )
        effect_id = motion.effect_id if motion is not None else WledEffect.SOLID.effect_id
        extra: dict[str, Any] = {}
        if motion is not None:
            extra = {
                "speed": motion.speed,
                "intensity": motion.intensity,
                "reverse": motion.reverse,
            }
        return to_segment_payload(
            result.groups,
            brightness=intent.global_settings.brightness,
            effect_id=effect_id,
            total_pixel_count=self.roofline.total_pixel_count,
            transition=intent.global_settings.device_transition,
            rgbw=self.composer.rgbw,
            **extra,
        )

    def send(self, result: CompositionResult | None = None) -> bool:
        """Deliver a compiled payload (the last one by default).

        Returns:
            False when there is nothing to send or the device rejected it.

        Raises:
            ValueError: If the session has no transport.
        """
        if self.transport is None:
            raise ValueError("No device transport configured")
        result = result or self._last_result
        if result is None or not result.success or result.payload is None:
            logger.warning("Nothing to send; compile a design first")
            return False
        return self.transport.send(result.payload)

    # ===================================================================
    # Persistence
    # ===================================================================

    def save(self, design_id: str, name: str = "") -> SavedDesign:
        """Store the current intent and last payload under ``design_id``."""
        payload = self._last_result.payload if self._last_result is not None else None
        design = SavedDesign(
            id=design_id,
            user_id=self.user_id,
            name=name or self.intent.original_prompt,
            intent=self.intent,
            roofline_id=self.roofline.id,
            payload=payload,
        )
        self.repository.save(design)
        logger.debug("Saved design %s", design_id)
        return design

    def load(self, design_id: str) -> DesignIntent:
        """Restore a saved intent as the current one.

        Raises:
            KeyError: If no such design exists for this user.
        """
        design = self.repository.load(self.user_id, design_id)
        if design is None:
            raise KeyError(design_id)
        if design.roofline_id is not None and design.roofline_id != self.roofline.id:
            logger.warning(
                "Design %s was saved for roofline %s, not %s",
                design_id,
                design.roofline_id,
                self.roofline.id,
            )
        return self._set_intent(design.intent)


__all__ = ["DesignSession", "PayloadFormat"]
