from intersection_sim.domain.models import Direction, Position, Vehicle
from intersection_sim.domain import config

class IntersectionLayout:
    """
    Geometry of the single four-way intersection.

    Coordinates follow screen convention: x grows east, y grows south.
    Traffic keeps right, so northbound lanes sit east of the centre line,
    southbound west of it, eastbound south of it and westbound north of it.
    """

    def __init__(self,
                 width: float = config.WORLD_WIDTH,
                 height: float = config.WORLD_HEIGHT,
                 road_half_width: float = config.ROAD_HALF_WIDTH,
                 lane_width: float = config.LANE_WIDTH):
        self.width = width
        self.height = height
        self.road_half_width = road_half_width
        self.lane_width = lane_width
        self.center = (width / 2, height / 2)

    def lane_offset(self, lane: int) -> float:
        return self.lane_width * 0.5 + lane * self.lane_width

    def lateral_coordinate(self, direction: Direction, lane: int) -> float:
        """x for north/south travel, y for east/west travel."""
        cx, cy = self.center
        offset = self.lane_offset(lane)
        if direction == Direction.NORTH: return cx + offset
        if direction == Direction.SOUTH: return cx - offset
        if direction == Direction.EAST: return cy + offset
        return cy - offset

    def spawn_position(self, direction: Direction, lane: int) -> Position:
        lateral = self.lateral_coordinate(direction, lane)
        if direction == Direction.NORTH:
            return Position(x=lateral, y=self.height + config.SPAWN_MARGIN)
        if direction == Direction.SOUTH:
            return Position(x=lateral, y=-config.SPAWN_MARGIN)
        if direction == Direction.EAST:
            return Position(x=-config.SPAWN_MARGIN, y=lateral)
        return Position(x=self.width + config.SPAWN_MARGIN, y=lateral)

    def progress(self, direction: Direction, position: Position) -> float:
        # Longitudinal coordinate that always grows in the direction of travel
        if direction == Direction.NORTH: return -position.y
        if direction == Direction.SOUTH: return position.y
        if direction == Direction.EAST: return position.x
        return -position.x

    def distance_to_entry(self, vehicle: Vehicle) -> float:
        """Signed distance to the near edge of the intersection box; negative once crossed."""
        cx, cy = self.center
        r = self.road_half_width
        pos = vehicle.position
        if vehicle.direction == Direction.NORTH: return pos.y - (cy + r)
        if vehicle.direction == Direction.SOUTH: return (cy - r) - pos.y
        if vehicle.direction == Direction.EAST: return (cx - r) - pos.x
        return pos.x - (cx + r)

    def contains(self, position: Position) -> bool:
        cx, cy = self.center
        r = self.road_half_width
        return (cx - r) <= position.x <= (cx + r) and (cy - r) <= position.y <= (cy + r)

    def advance(self, vehicle: Vehicle, distance: float):
        pos = vehicle.position
        if vehicle.direction == Direction.NORTH: pos.y -= distance
        elif vehicle.direction == Direction.SOUTH: pos.y += distance
        elif vehicle.direction == Direction.EAST: pos.x += distance
        else: pos.x -= distance

    def snap_to_lane(self, vehicle: Vehicle):
        lateral = self.lateral_coordinate(vehicle.direction, vehicle.lane)
        if vehicle.direction in (Direction.NORTH, Direction.SOUTH):
            vehicle.position.x = lateral
        else:
            vehicle.position.y = lateral

    def is_out_of_bounds(self, position: Position, margin: float = config.EXIT_MARGIN) -> bool:
        return (position.x < -margin or position.x > self.width + margin or
                position.y < -margin or position.y > self.height + margin)
