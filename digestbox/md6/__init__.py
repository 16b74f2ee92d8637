"""Pure-Python MD6: compression function, bit helpers and incremental hasher."""