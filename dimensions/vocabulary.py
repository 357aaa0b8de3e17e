"""
dimensions/vocabulary.py

Apparel keyword vocabulary per semantic dimension.

The table is an ordered tuple: classification walks it front to back and
the first dimension with a matching trigger wins. Several triggers appear
under more than one dimension ("运动" is both scene and design, "休闲" is
both scene and fit), so reordering the table changes results.
"""

from __future__ import annotations

from dataclasses import dataclass


class Dimension:
    SCENE = "scene"
    FUNCTION = "function"
    MATERIAL = "material"
    FIT = "fit"
    DESIGN = "design"
    OTHER = "other"


# Selector meaning "every dimension"; never returned by classification.
ALL_DIMENSIONS = "all"

DIMENSION_ORDER: tuple[str, ...] = (
    Dimension.SCENE,
    Dimension.FUNCTION,
    Dimension.MATERIAL,
    Dimension.FIT,
    Dimension.DESIGN,
    Dimension.OTHER,
)

DIMENSION_LABELS: dict[str, str] = {
    ALL_DIMENSIONS: "全部",
    Dimension.SCENE: "场景",
    Dimension.FUNCTION: "功能",
    Dimension.MATERIAL: "材质",
    Dimension.FIT: "版型",
    Dimension.DESIGN: "设计",
    Dimension.OTHER: "其他",
}


@dataclass(frozen=True)
class DimensionVocabulary:
    """
    Ordered ``(dimension, triggers)`` pairs, highest priority first.
    """

    entries: tuple[tuple[str, tuple[str, ...]], ...]

    def dimensions(self) -> tuple[str, ...]:
        return tuple(dimension for dimension, _ in self.entries)

    def triggers(self, dimension: str) -> tuple[str, ...]:
        for name, triggers in self.entries:
            if name == dimension:
                return triggers
        return ()


_SCENE_TRIGGERS: tuple[str, ...] = (
    # everyday
    "日常", "通勤", "上班", "上学", "逛街", "休闲", "居家", "居家办公",
    # sport
    "运动", "健身", "瑜伽", "跑步", "户外", "徒步", "登山", "骑行", "露营",
    # social
    "聚会", "约会", "派对", "宴会", "应酬", "社交", "商务",
    # occasions
    "度假", "旅行", "旅游", "海边", "沙滩", "滑雪", "温泉", "野餐",
    "音乐节", "演唱会", "展览", "博物馆", "图书馆",
    # seasons
    "春季", "夏季", "秋季", "冬季", "春天", "夏天", "秋天", "冬天",
    "早晚", "日夜", "四季", "换季",
    "面试", "拍照", "打卡", "探店", "看展", "出差", "出国",
)

_FUNCTION_TRIGGERS: tuple[str, ...] = (
    "透气", "速干", "吸湿", "排汗", "防水", "防风", "保暖", "隔热",
    "防晒", "防紫外线", "抗UV", "遮光", "防蚊", "抗菌",
    # comfort
    "舒适", "柔软", "亲肤", "轻盈", "轻薄", "轻便", "无感", "裸感",
    "弹力", "弹性", "伸缩", "不紧绷", "不勒", "不束缚",
    # durability
    "耐磨", "耐穿", "耐用", "抗皱", "抗起球", "不易变形", "不掉色",
    "易打理", "免熨烫", "可机洗", "快干",
    # shaping
    "显瘦", "显白", "显高", "遮肉", "修身", "塑形", "收腹", "提臀",
    "收胯", "遮胯", "遮肚", "遮手臂", "显腿长", "显腰细",
    "多功能", "多场景", "百搭", "易搭配", "好穿脱", "方便", "实用",
)

_MATERIAL_TRIGGERS: tuple[str, ...] = (
    # natural fibres
    "棉", "纯棉", "全棉", "有机棉", "埃及棉", "长绒棉", "皮马棉",
    "麻", "亚麻", "苎麻", "汉麻",
    "丝", "真丝", "桑蚕丝", "柞蚕丝", "香云纱",
    "毛", "羊毛", "羊绒", "驼绒", "马海毛", "羊驼毛", "牦牛绒",
    "羽绒", "鸭绒", "鹅绒", "白鸭绒", "灰鸭绒",
    # synthetics
    "涤纶", "聚酯纤维", "尼龙", "锦纶", "氨纶", "莱卡", "腈纶",
    "粘胶", "人造丝", "莫代尔", "莱赛尔", "天丝", "铜氨丝",
    "醋酸", "三醋酸", "涤棉", "涤麻", "棉麻", "丝棉", "羊毛混纺",
    # novel materials
    "竹纤维", "大豆纤维", "玉米纤维", "牛奶纤维", "海藻纤维",
    "石墨烯", "碳纤维", "相变材料", "气凝胶", "温控", "凉感", "暖感",
    # weaves and finishes
    "针织", "梭织", "平纹", "斜纹", "缎纹", "提花", "印花", "扎染",
    "灯芯绒", "牛仔", "帆布", "府绸", "牛津纺", "雪纺", "蕾丝",
    "网纱", "欧根纱", "丝绒", "天鹅绒", "金丝绒", "摇粒绒", "珊瑚绒",
    "法兰绒", "华夫格", "罗纹", "毛圈", "毛巾布",
    # leather and fur
    "真皮", "牛皮", "羊皮", "猪皮", "麂皮", "磨砂皮", "漆皮",
    "人造革", "PU", "PVC", "超纤", "合成革",
    "皮草", "貂皮", "狐狸毛", "兔毛", "人造毛", "仿皮草",
)

_FIT_TRIGGERS: tuple[str, ...] = (
    # loose
    "宽松", "oversize", "落肩", "蝙蝠袖", "廓形", "茧型", "A字",
    "直筒", "H型", "Boyfriend", "男友风", "慵懒", "休闲",
    "大码", "加大", "加肥", "特大号", "松身", "roomy",
    # fitted
    "修身", "紧身", "贴身", "合身", "Slim", "skinny", "bodycon",
    "收腰", "X型", "沙漏型", "S型", "曲线", "包臀",
    # length and rise
    "短款", "超短", "露脐", "crop", "常规", "标准", "中长款",
    "长款", "加长", "超长", "及膝", "及踝", "拖地", "九分", "七分", "五分",
    "高腰", "中腰", "低腰", "超高腰", "自然腰", "松紧腰",
    # sleeves
    "长袖", "短袖", "无袖", "七分袖", "五分袖", "泡泡袖", "灯笼袖",
    "喇叭袖", "荷叶袖", "飞飞袖", "插肩袖", "连肩袖", "和服袖",
    # necklines
    "圆领", "V领", "U领", "方领", "一字领", "斜肩", "露肩", "吊带",
    "高领", "半高领", "中领", "翻领", "衬衫领", "POLO领", "娃娃领",
    "西装领", "戗驳领", "平驳领", "青果领", "连帽", "立领", "堆堆领",
    # trousers
    "阔腿裤", "直筒裤", "小脚裤", "铅笔裤", "喇叭裤", "微喇", "哈伦裤",
    "锥形裤", "萝卜裤", "工装裤", "运动裤", "卫裤", "休闲裤", "西裤",
    "热裤", "短裤", "中裤", "五分裤", "七分裤", "九分裤", "拖地裤",
    "背带裤", "连体裤", "裙裤", "灯笼裤",
    # skirts
    "A字裙", "伞裙", "百褶裙", "包臀裙", "铅笔裙", "鱼尾裙", "荷叶边裙",
    "蛋糕裙", "蓬蓬裙", "公主裙", "吊带裙", "背带裙", "半身裙", "连衣裙",
    "短裙", "中裙", "长裙", "超短裙", "迷笛裙", "及踝裙", "开叉裙",
)

_DESIGN_TRIGGERS: tuple[str, ...] = (
    # styles
    "简约", "极简", "性冷淡", "北欧", "日式", "日系", "韩系", "韩版",
    "欧美", "法式", "英伦", "复古", "vintage", "港风", "台系",
    "街头", "嘻哈", "朋克", "摇滚", "机车", "工装", "机能",
    "运动", "athleisure", "高尔夫", "网球", "学院", "preppy",
    "甜美", "可爱", "少女", "淑女", "优雅", "知性", "气质",
    "性感", "辣妹", "y2k", "千禧", "甜辣", "纯欲", "御姐",
    "中性", "无性别", "unisex", "男女同款",
    "民族", "波西米亚", "田园", "森系", "文艺", "小清新",
    "奢华", "高端", "轻奢", "高级感", "贵妇", "名媛",
    # patterns
    "纯色", "素色", "单色", "黑白", "条纹", "横条", "竖条", "格纹",
    "格子", "苏格兰格", "千鸟格", "维希格", "波点", "圆点", "碎花",
    "大花", "印花", "刺绣", "绣花", "贴布", "徽章", "logo",
    "几何", "抽象", "艺术", "油画", "水彩", "迷彩", "动物纹",
    "豹纹", "斑马纹", "蛇纹", "虎纹", "奶牛纹", "字母", "文字",
    "卡通", "联名", "IP", "动漫", "二次元", "游戏", "影视",
    # details
    "口袋", "大口袋", "多口袋", "拉链", "纽扣", "魔术贴", "系带",
    "绑带", "抽绳", "褶皱", "打褶", "压褶", "荷叶边", "木耳边",
    "花边", "蕾丝", "镂空", "透视", "露背", "露肩", "露腰",
    "破洞", "磨破", "水洗", "做旧", "渐变", "扎染", "拼接",
    "撞色", "拼色", "分割", "解构", "不对称", "层叠", "流苏",
    "毛边", "卷边", "挽边", "翻边", "开叉", "分叉",
    "腰带", "腰封", "松紧", "橡筋", "罗纹", "螺纹", "坑条",
    # craft
    "手工", "定制", "高定", "成衣", "立体裁剪", "无缝", "一体成型",
    "环保", "可持续", "再生", "有机", "绿色", "零碳",
)

DEFAULT_DIMENSION_VOCABULARY = DimensionVocabulary(
    entries=(
        (Dimension.SCENE, _SCENE_TRIGGERS),
        (Dimension.FUNCTION, _FUNCTION_TRIGGERS),
        (Dimension.MATERIAL, _MATERIAL_TRIGGERS),
        (Dimension.FIT, _FIT_TRIGGERS),
        (Dimension.DESIGN, _DESIGN_TRIGGERS),
    )
)
