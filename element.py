# An Element is one node of the abstract syntax tree. elem_type holds the node type
# (one of the *_DEF constants in InterpreterBase, or an operator like "+"), and
# dict holds the node's named fields, e.g. "name", "expression", "statements".
class Element:
    def __init__(self, elem_type, line_num=None):
        self.elem_type = elem_type
        self.line_num = line_num
        self.dict = {}

    def get(self, key):
        return self.dict.get(key)

    def __str__(self):
        return self.__format(0)

    def __format(self, depth):
        pad = "  " * depth
        lines = [f"{pad}{self.elem_type}"]
        for key, value in self.dict.items():
            if isinstance(value, Element):
                lines.append(f"{pad}  {key}:")
                lines.append(value.__format(depth + 2))
            elif isinstance(value, list) and value and isinstance(value[0], Element):
                lines.append(f"{pad}  {key}:")
                for item in value:
                    lines.append(item.__format(depth + 2))
            else:
                lines.append(f"{pad}  {key}: {value!r}")
        return "\n".join(lines)
