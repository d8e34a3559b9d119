"""
Sample scene template for curved_arrow
"""

SAMPLE_SCENE_TEMPLATE = """# Curved Arrow Scene
# ============================================================================
# Two boxes connected by a curved arrow, routed around an obstacle.
# Coordinates are in container space; the container origin is (0, 0).

name: "sample"
description: "Two boxes and an obstacle"

container:
  width: 800
  height: 400

# Named rectangles
# ----------------------------------------------------------------------------
entities:
  source:   {x: 40,  y: 160, width: 120, height: 60}
  target:   {x: 620, y: 160, width: 120, height: 60}
  blocker:  {x: 340, y: 150, width: 100, height: 80}

# Connector ends: an entity name (docked by arrow.start_position /
# arrow.end_position) or fixed coordinates {x: ..., y: ...}
start:
  entity: source
end:
  entity: target

# Entities the around-obstacle / shortest-path styles should avoid
obstacles:
  - blocker

# Connector appearance
# ----------------------------------------------------------------------------
arrow:
  start_position: right
  end_position: left
  curve:
    type: around-obstacle   # smooth, dramatic, s-curve, wave, elegant, zigzag, around-obstacle, shortest-path
    intensity: 0.4          # 0.1 - 2.0
    direction: auto         # up, down, left, right, auto
  stroke:
    stroke_width: 4
    color: "#852DEE"
    gradient_from: "#ffffff"
    gradient_to: "#852DEE"
  arrow_size: 20
  end_head:
    shape: triangle
    layer: over
  start_head:
    visible: false
  animation:
    enabled: true
    duration: "2s"
    direction: forward      # forward, reverse, alternate, alternate-reverse
  variant: default          # glow, neon, fire, electric and cosmic add a halo
  aria_label: "Source flows into target"
  # tolerance: 0.5
"""
