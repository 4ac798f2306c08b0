from vector import vec


class Light:
    def __init__(self, position, color):
        self.position = vec(position)
        # Components above 1.0 mean a brighter light
        self.color = vec(color)

    def __repr__(self):
        return "Light(position={}, color={})".format(self.position.tolist(), self.color.tolist())
