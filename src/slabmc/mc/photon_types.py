import numpy as np

FACE_NEAR = 0   # 入射面 z=0（反射）
FACE_FAR = 1    # 远面 z=d（透射）

# 单个出射事件的数据结构
ExitRecord = np.dtype([
    ("x","f8"),("y","f8"),("z","f8"),     # 出射前最后位置
    ("ux","f8"),("uy","f8"),("uz","f8"),  # 出射方向余弦
    ("w","f8"),                           # 出射权重
    ("face","i1")                         # FACE_NEAR / FACE_FAR
])
