from motionflow.flow import all_of, fade, wait_for

view = {
    "header": "opacity-0 translate-y-4",
    "editorPanel": "bg-slate-900 rounded-2xl opacity-0 -translate-x-8",
    "visualizerPanel": "bg-slate-900/50 rounded-2xl opacity-0 translate-x-8",
    "codeContent": "text-blue-300",
    "statusText": "text-slate-400",
    "bar0": "w-12 h-[100px] bg-blue-500 rounded-t-lg",
    "bar1": "w-12 h-[60px] bg-blue-500 rounded-t-lg translate-x-[60px]",
    "bar2": "w-12 h-[160px] bg-blue-500 rounded-t-lg translate-x-[120px]",
}

CODE = """def bubble_sort(values):
    n = len(values)
    for i in range(n - 1):
        for j in range(n - i - 1):
            if values[j] > values[j + 1]:
                values[j], values[j + 1] = values[j + 1], values[j]
"""


def flow(stage):
    yield from fade(0.5)

    yield from all_of(
        stage.header("opacity-100 translate-y-0", 1),
        stage.editorPanel("opacity-100 translate-x-0", 1),
        stage.visualizerPanel("opacity-100 translate-x-0", 1),
    )
    yield from wait_for(0.5)

    yield from stage.codeContent.text(CODE, 2)
    yield from wait_for(1)

    yield from stage.statusText.text("Comparing 5 and 3", 0.2)
    yield from all_of(stage.bar0("bg-yellow-500", 0.3), stage.bar1("bg-yellow-500", 0.3))
    yield from wait_for(0.4)

    yield from stage.statusText.text("Swapping 5 and 3", 0.2)
    yield from all_of(stage.bar0("bg-red-500", 0.3), stage.bar1("bg-red-500", 0.3))
    yield from all_of(
        stage.bar0("translate-x-[60px]", 0.6),
        stage.bar1("translate-x-0", 0.6),
    )
    yield from all_of(stage.bar0("bg-blue-500", 0.3), stage.bar1("bg-blue-500", 0.3))

    # Both pairs settle; flash the sorted bars twice.
    for _ in range(2):
        yield from all_of(
            stage.bar0("brightness-150", 0.25),
            stage.bar1("brightness-150", 0.25),
            stage.bar2("brightness-150", 0.25),
        )
        yield from all_of(
            stage.bar0("brightness-100", 0.25),
            stage.bar1("brightness-100", 0.25),
            stage.bar2("brightness-100", 0.25),
        )

    yield from stage.statusText.text("Sorted!", 0.5)
    yield from wait_for(1)
