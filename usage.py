from graphical_method import graphical_method  # array-style entry point
# or: from graphical_method import solve        # typed records in, Solution / NoSolution out

c = [70, 130]
A = [[12, 6],
     [0, 15],
     [2, 8],
     [0, 1]]
b = [600, 300, 220, 10]
sense = ["<=", "<=", "<=", ">="]

res = graphical_method(c, A, b, sense, "maximize", opts={"launch_viewer": True})
print(res["x"], res["z"])
