from motionflow.flow import all_of, wait_for

view = {
    "title": "text-9xl font-black tracking-tighter opacity-0 translate-y-10 bg-gradient-to-r from-white to-zinc-400",
    "subtitle": "mt-6 text-2xl text-zinc-400 tracking-widest opacity-0 translate-y-4",
    "line": "mt-8 w-0 h-[1px] bg-gradient-to-r from-transparent via-blue-500 to-transparent opacity-50",
}


def flow(stage):
    # Reveal title
    yield from stage.title("opacity-100 translate-y-0", 1.5)

    # Subtitle and line together
    yield from all_of(
        stage.subtitle("opacity-100 translate-y-0", 1),
        stage.line("w-96 opacity-50", 1.2),
    )

    yield from wait_for(1)

    # Fade out everything
    yield from all_of(
        stage.title("opacity-0", 1),
        stage.subtitle("opacity-0", 1),
        stage.line("opacity-0", 1),
    )
