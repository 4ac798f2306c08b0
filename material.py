from vector import vec


class Material:
    def __init__(self, color, diffuse=0.0, specular=0.0, reflective=0.0):
        self.color = vec(color)
        self.diffuse = float(diffuse)
        self.specular = float(specular)
        self.reflective = float(reflective)

    def copy(self):
        return Material(self.color, self.diffuse, self.specular, self.reflective)

    def __repr__(self):
        return "Material(color={}, diffuse={}, specular={}, reflective={})".format(
            self.color.tolist(), self.diffuse, self.specular, self.reflective)
