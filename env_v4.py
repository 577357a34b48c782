# A Slot stores the current Value of one variable. Closures that captured the
# scope holding a slot all share it, so a write made through one is seen by the others.
class Slot:
    def __init__(self, value):
        self.v = value

    def read(self):
        return self.v

    def write(self, value):
        self.v = value


# A Scope maps each variable name (aka symbol) declared in one function call or block
# to its Slot, and links to the scope it is nested in. The global scope has no parent.
# Scopes live as long as something (an active call or a closure) refers to them.
class Scope:
    def __init__(self, parent=None):
        self.parent = parent
        self.slots = {}

    def __contains__(self, symbol):
        return symbol in self.slots

    # create a new slot in this scope, regardless of whether the symbol exists in an
    # enclosing scope. declaring a symbol twice in the same scope rebinds it to the new slot
    def declare(self, symbol, value):
        slot = Slot(value)
        self.slots[symbol] = slot
        return slot

    # returns the Slot for symbol from the innermost scope that declares it, or None
    def resolve(self, symbol):
        env = self
        while env is not None:
            if symbol in env.slots:
                return env.slots[symbol]
            env = env.parent
        return None

    # used when we enter a nested block or a function call
    def child(self):
        return Scope(self)
