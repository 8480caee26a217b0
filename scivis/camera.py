"""A first-person fly camera driven by key state and mouse motion."""

from __future__ import annotations

import math

from .matrix import Mat4
from .vec import Vec3

_PITCH_LIMIT = 89.0


class Camera:
    """Camera with yaw/pitch orientation and constant-speed movement."""

    def __init__(self, position: Vec3, move_speed: float = 0.015,
                 mouse_sens: float = 0.15,
                 world_up: Vec3 = Vec3(0.0, 1.0, 0.0)) -> None:
        self.position = position
        self.move_speed = move_speed
        self.mouse_sens = mouse_sens
        self.world_up = world_up

        self.yaw = -90.0
        self.pitch = 0.0

        self._moving_front = False
        self._moving_back = False
        self._moving_left = False
        self._moving_right = False

        self._mouse_enabled = False
        self._last_mouse: tuple[float, float] | None = None

        self._update_direction()

    def _update_direction(self) -> None:
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        self.direction = Vec3(
            math.cos(yaw) * math.cos(pitch),
            math.sin(pitch),
            math.sin(yaw) * math.cos(pitch),
        ).normalize()
        self.right = self.direction.cross(self.world_up).normalize()
        self.up = self.right.cross(self.direction).normalize()

    def move_front(self, moving: bool) -> None:
        self._moving_front = moving

    def move_back(self, moving: bool) -> None:
        self._moving_back = moving

    def move_right(self, moving: bool) -> None:
        self._moving_right = moving

    def move_left(self, moving: bool) -> None:
        self._moving_left = moving

    def enable_mouse(self) -> None:
        self._mouse_enabled = True

    def disable_mouse(self) -> None:
        """Stop reacting to the mouse and forget the last cursor position."""
        self._mouse_enabled = False
        self._last_mouse = None

    def mouse_move(self, x: float, y: float) -> None:
        """Turn the camera by the cursor motion since the previous call."""
        if not self._mouse_enabled:
            return
        if self._last_mouse is None:
            self._last_mouse = (x, y)
            return

        last_x, last_y = self._last_mouse
        self._last_mouse = (x, y)

        self.yaw += (x - last_x) * self.mouse_sens
        self.pitch += (last_y - y) * self.mouse_sens
        self.pitch = max(-_PITCH_LIMIT, min(_PITCH_LIMIT, self.pitch))

        self._update_direction()

    def update_position(self) -> None:
        """Advance one step in every direction currently held."""
        if self._moving_front:
            self.position = self.position + self.direction * self.move_speed
        if self._moving_back:
            self.position = self.position - self.direction * self.move_speed
        if self._moving_right:
            self.position = self.position + self.right * self.move_speed
        if self._moving_left:
            self.position = self.position - self.right * self.move_speed

    def view_matrix(self) -> Mat4:
        return Mat4.look_at(self.position, self.position + self.direction, self.up)