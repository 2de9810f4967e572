# Request validation: identifier parsing, field normalization, rule chains, patches
