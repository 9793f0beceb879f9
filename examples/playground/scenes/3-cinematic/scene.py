from motionflow.flow import all_of, chain, wait_for, zoom

view = {
    "camera": "relative w-full h-full",
    "icon1": "opacity-0 translate-y-10 scale-50 text-indigo-500",
    "icon2": "opacity-0 translate-y-10 scale-50 text-purple-500",
    "icon3": "opacity-0 translate-y-10 scale-50 text-pink-500",
    "mainTitle": "text-8xl font-black opacity-0 scale-150 blur-lg bg-gradient-to-r from-indigo-200 via-white to-indigo-200",
    "separator": "w-0 h-1 opacity-0 bg-gradient-to-r from-transparent via-indigo-500 to-transparent",
    "subText": "mt-4 text-xl tracking-[1em] opacity-0 translate-y-4",
}


def flow(stage):
    yield from zoom(1)

    # Camera zoom in while the icons appear one by one
    yield from all_of(
        stage.camera("scale-110", 2),
        chain(
            stage.icon1("opacity-50 translate-y-0 scale-100", 0.5),
            stage.icon2("opacity-50 translate-y-0 scale-100", 0.5),
            stage.icon3("opacity-50 translate-y-0 scale-100", 0.5),
        ),
    )

    yield from all_of(
        stage.mainTitle("opacity-100 scale-100 blur-0", 0.8),
        stage.separator("w-64 opacity-100", 1),
        stage.camera("scale-100", 0.2),
    )

    yield from all_of(
        stage.subText("opacity-100 translate-y-0", 1.5),
        stage.camera("scale-105 rotate-1", 3),
    )

    yield from all_of(
        stage.mainTitle("opacity-0 blur-lg scale-150", 1),
        stage.subText("opacity-0 tracking-[2em]", 1),
        stage.separator("w-0 opacity-0", 1),
        stage.icon1("opacity-0 scale-0", 0.5),
        stage.icon2("opacity-0 scale-0", 0.5),
        stage.icon3("opacity-0 scale-0", 0.5),
        stage.camera("scale-100 rotate-0", 1),
    )

    yield from wait_for(0.5)
