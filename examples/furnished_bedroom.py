#!/usr/bin/env python3
"""Example: Build and furnish a bedroom, then export it.

This script demonstrates the basic workflow for roomforge:
1. Build a room shell
2. Place furniture and openings
3. Edit the scene with text commands
4. Export the scene as JSON and as a GLB mesh

Run with: python examples/furnished_bedroom.py
"""

import numpy as np

from roomforge import CommandExecutor, ModelingSession, RoomBuilder, RoomDimensions, RoomforgeConfig
from roomforge.mesh.export import export_mesh
from roomforge.scene.export import save_scene


def main():
    config = RoomforgeConfig.default()
    session = ModelingSession()
    builder = RoomBuilder(session, config.room, np.random.default_rng(7))

    print("roomforge - Furnished Bedroom Example")
    print("=" * 40)

    print("\n1. Building room shell...")
    room = builder.build_room("bedroom", RoomDimensions(width=4, length=5, height=3))
    print(f"   {room.name}: {len(room.walls)} walls, floor {room.floor}")

    print("\n2. Placing furniture...")
    for furniture_type in ("bed", "nightstand", "wardrobe", "desk"):
        piece = builder.place_furniture(furniture_type)
        p = piece.position
        print(f"   {piece.name:<12} at ({p.x:+.2f}, {p.y:.2f}, {p.z:+.2f})")
    builder.place_structural("door")
    builder.place_structural("window")

    print("\n3. Editing with text commands...")
    executor = CommandExecutor(session)
    for command in ("select the bed", "rotate object 90", "color object navy", "create sphere gold at 0 2 0"):
        result = executor.execute(command)
        print(f"   {command:<28} -> {result.message}")

    print("\n4. Exporting...")
    save_scene(session.store, "bedroom.json")
    export_mesh(session.store.objects, "bedroom.glb")
    print(f"   Wrote bedroom.json and bedroom.glb ({len(session.store)} objects)")


if __name__ == "__main__":
    main()
