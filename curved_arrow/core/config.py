"""
Configuration management for curved arrow connectors with Pydantic validation
"""

import logging
import math
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .anchors import DEFAULT_PADDING, normalize_dock

logger = logging.getLogger(__name__)


# ============================================================================
# Vocabulary
# ============================================================================

CURVE_TYPES = (
    'smooth', 'dramatic', 's-curve', 'wave', 'elegant',
    'zigzag', 'around-obstacle', 'shortest-path',
)

# Accepted by the configuration surface but not implemented; they render as 'smooth'
RESERVED_CURVE_TYPES = ('spiral', 'loop', 'heart', 'infinity')

HEAD_SHAPES = (
    'triangle', 'circle', 'square', 'diamond', 'star', 'heart',
    'cross', 'plus', 'chevron', 'double-chevron', 'arrow',
    'hollow-triangle', 'hollow-circle', 'hollow-square', 'hollow-diamond',
    'filled-circle', 'filled-square', 'filled-diamond', 'filled-triangle',
    'line', 'dot', 'dash',
)

MIN_INTENSITY = 0.1
MAX_INTENSITY = 2.0
DEFAULT_INTENSITY = 0.4

CurveDirection = Literal['up', 'down', 'left', 'right', 'auto']
HeadLayer = Literal['under', 'over']
AnimationDirection = Literal['forward', 'reverse', 'alternate', 'alternate-reverse']

_CSS_TIME = re.compile(r'^\s*(\d+(?:\.\d+)?|\.\d+)\s*(ms|s)\s*$', re.IGNORECASE)


def parse_css_time(value: Union[str, int, float]) -> float:
    """
    Parse a CSS time string into seconds

    Args:
        value: '2s', '300ms', '.5s' or a bare number of seconds

    Returns:
        Duration in seconds

    Raises:
        ValueError: If the value is not a valid CSS time
    """
    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError(f"Time must be non-negative, got {value}")
        return float(value)

    match = _CSS_TIME.match(value or '')
    if not match:
        raise ValueError(f"Invalid CSS time value: '{value}'")
    amount = float(match.group(1))
    if match.group(2).lower() == 'ms':
        return amount / 1000.0
    return amount


# ============================================================================
# Pydantic Models for Connector Configuration
# ============================================================================

class CurveSpec(BaseModel):
    """Curve style, bow intensity and bow direction"""
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field('smooth', description="Curve style preset")
    intensity: float = Field(DEFAULT_INTENSITY, description="Bow intensity, clamped to [0.1, 2.0]")
    direction: CurveDirection = Field('auto', description="Bow direction")
    requested_type: Optional[str] = Field(
        None, exclude=True, description="Original type when it fell back to smooth"
    )

    @model_validator(mode='before')
    @classmethod
    def remember_requested_type(cls, data):
        if isinstance(data, dict) and 'type' in data:
            name = str(data['type'] or '').strip().lower()
            if name not in CURVE_TYPES:
                data = {**data, 'requested_type': str(data['type'])}
        return data

    @property
    def fell_back(self) -> bool:
        """True when the configured type was reserved or unrecognized"""
        return self.requested_type is not None

    @field_validator('type', mode='before')
    @classmethod
    def normalize_type(cls, v):
        """Fall back to 'smooth' for reserved or unrecognized curve types"""
        name = str(v or '').strip().lower()
        if name in CURVE_TYPES:
            return name
        if name in RESERVED_CURVE_TYPES:
            logger.debug(f"Curve type '{name}' is reserved, falling back to smooth")
        else:
            logger.debug(f"Unrecognized curve type '{v}', falling back to smooth")
        return 'smooth'

    @field_validator('intensity', mode='before')
    @classmethod
    def clamp_intensity(cls, v):
        """Clamp intensity into the supported range; NaN falls back to the default"""
        value = float(v)
        if math.isnan(value):
            logger.debug(f"Intensity is NaN, using default {DEFAULT_INTENSITY}")
            return DEFAULT_INTENSITY
        return min(max(value, MIN_INTENSITY), MAX_INTENSITY)


class HeadSpec(BaseModel):
    """Arrowhead appearance and layer assignment for one connector end"""
    shape: str = Field('triangle', description="Head shape preset")
    size: Optional[float] = Field(None, gt=0, description="Head size (falls back to arrow_size)")
    rotation: float = Field(0.0, description="Extra rotation in degrees")
    filled: bool = Field(False, description="Fill the head with the fill paint")
    stroke_color: Optional[str] = Field(None, description="Stroke override")
    fill_color: Optional[str] = Field(None, description="Fill override")
    stroke_width: Optional[float] = Field(None, ge=0, description="Stroke width override")
    opacity: float = Field(1.0, ge=0.0, le=1.0, description="Head opacity")
    layer: HeadLayer = Field('over', description="Layer the head is drawn on")
    visible: bool = Field(True, description="Draw this head")
    line_over_head: bool = Field(False, description="Draw a short line overlay above the head")

    @field_validator('shape', mode='before')
    @classmethod
    def normalize_shape(cls, v):
        name = str(v or '').strip().lower()
        if name not in HEAD_SHAPES:
            logger.debug(f"Unknown head shape '{v}', it will render as an open triangle")
        return name

    @property
    def is_filled(self) -> bool:
        """Filled when requested or when the preset is a filled shape"""
        return self.filled or 'filled' in self.shape


class StrokeStyle(BaseModel):
    """Paint for the main line"""
    stroke_width: float = Field(4.0, gt=0, description="Main line stroke width")
    color: str = Field('#852DEE', min_length=1, description="Solid stroke color")
    gradient_from: Optional[str] = Field('#ffffff', description="Gradient start color")
    gradient_to: Optional[str] = Field('#852DEE', description="Gradient end color")

    @property
    def has_gradient(self) -> bool:
        return bool(self.gradient_from and self.gradient_to)


class AnimationSpec(BaseModel):
    """Animated dash overlay timing"""
    enabled: bool = Field(True, description="Draw the animated dash overlay")
    duration: str = Field('2s', description="CSS time for one dash cycle")
    delay: str = Field('0s', description="CSS time before the animation starts")
    direction: AnimationDirection = Field('forward', description="Animation direction mode")

    @field_validator('duration', 'delay', mode='before')
    @classmethod
    def validate_time(cls, v):
        if isinstance(v, (int, float)):
            v = f"{v}s"
        parse_css_time(v)
        return v

    @model_validator(mode='after')
    def validate_duration(self):
        if parse_css_time(self.duration) <= 0:
            raise ValueError(f"Animation duration must be positive, got '{self.duration}'")
        return self


def _default_start_head() -> HeadSpec:
    return HeadSpec(visible=False)


class ArrowConfig(BaseModel):
    """Complete configuration surface of one connector"""
    model_config = ConfigDict(extra='ignore')

    curve: CurveSpec = Field(default_factory=CurveSpec)
    stroke: StrokeStyle = Field(default_factory=StrokeStyle)
    arrow_size: float = Field(20.0, gt=0, description="Default head size")
    start_head: HeadSpec = Field(default_factory=_default_start_head)
    end_head: HeadSpec = Field(default_factory=HeadSpec)
    start_position: str = Field('center', description="Dock position on the start entity")
    end_position: str = Field('center', description="Dock position on the end entity")
    animation: AnimationSpec = Field(default_factory=AnimationSpec)
    variant: str = Field('default', description="Opaque visual style id")
    aria_label: str = Field('Curved arrow connector', description="Accessible label")
    padding: float = Field(DEFAULT_PADDING, ge=0, description="Edge dock padding")
    tolerance: float = Field(0.5, gt=0, description="Change-suppression tolerance")

    @field_validator('start_position', 'end_position', mode='before')
    @classmethod
    def normalize_position(cls, v):
        return normalize_dock(str(v))

    def head_size(self, head: HeadSpec) -> float:
        return head.size or self.arrow_size


# ============================================================================
# Scene configuration (CLI input)
# ============================================================================

class PointConfig(BaseModel):
    x: float
    y: float


class RectConfig(BaseModel):
    x: float
    y: float
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)


class EndpointConfig(BaseModel):
    """A connector end: a named entity with a dock, or fixed coordinates"""
    entity: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None

    @model_validator(mode='after')
    def validate_endpoint(self):
        has_point = self.x is not None and self.y is not None
        if self.entity is None and not has_point:
            raise ValueError("Endpoint requires either 'entity' or both 'x' and 'y'")
        if self.entity is not None and (self.x is not None or self.y is not None):
            raise ValueError("Endpoint cannot define both 'entity' and coordinates")
        return self


class ContainerConfig(BaseModel):
    width: float = Field(800, gt=0)
    height: float = Field(600, gt=0)


class SceneConfigModel(BaseModel):
    """Pydantic model for scene validation"""
    model_config = ConfigDict(extra='ignore')

    name: Optional[str] = None
    description: Optional[str] = None
    container: ContainerConfig = Field(default_factory=ContainerConfig)
    entities: Dict[str, RectConfig] = Field(default_factory=dict)
    start: EndpointConfig
    end: EndpointConfig
    obstacles: List[str] = Field(default_factory=list)
    arrow: ArrowConfig = Field(default_factory=ArrowConfig)

    @model_validator(mode='after')
    def validate_references(self):
        """Every referenced entity must be declared"""
        referenced = [e.entity for e in (self.start, self.end) if e.entity] + list(self.obstacles)
        missing = [name for name in referenced if name not in self.entities]
        if missing:
            raise ValueError(f"Undeclared entities referenced: {', '.join(missing)}")
        return self


# ============================================================================
# Environment Variable Substitution
# ============================================================================

def _substitute_env_vars(value: Any) -> Any:
    """
    Recursively substitute environment variables in configuration values

    Supports ${VAR_NAME}, $VAR_NAME and ${VAR_NAME:-default_value}.
    """
    if isinstance(value, str):
        def replace_with_default(match):
            var_name = match.group(1)
            default_value = match.group(3) if match.group(2) else None
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable '{var_name}' is not set and no default value provided")

        value = re.sub(r'\$\{([A-Za-z_][A-Za-z0-9_]*)(:-([^}]*))?\}', replace_with_default, value)

        def replace_simple(match):
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            raise ValueError(f"Environment variable '{var_name}' is not set")

        return re.sub(r'\$([A-Za-z_][A-Za-z0-9_]*)', replace_simple, value)

    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]

    return value


class SceneConfig:
    """Scene description for rendering a connector outside a live layout"""

    def __init__(self, config_dict: Dict):
        """Initialize from dictionary (parsed from YAML) with Pydantic validation"""
        config_dict = _substitute_env_vars(config_dict or {})

        try:
            self._model = SceneConfigModel(**config_dict)
        except Exception as e:
            raise ValueError(f"Configuration validation failed: {str(e)}") from e

        self.name = self._model.name
        self.description = self._model.description
        self.container_width = self._model.container.width
        self.container_height = self._model.container.height
        self.entities = {
            name: (rect.x, rect.y, rect.width, rect.height)
            for name, rect in self._model.entities.items()
        }
        self.start = self._model.start
        self.end = self._model.end
        self.obstacles = list(self._model.obstacles)
        self.arrow = self._model.arrow

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> 'SceneConfig':
        """Load a scene from a YAML file with validation"""
        try:
            with open(yaml_path, 'r') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML file: {str(e)}") from e
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        return cls(config_dict)

    def to_dict(self) -> Dict:
        """Convert the scene back to a dictionary"""
        return self._model.model_dump(exclude_none=True)
