from countrysearch.services.page import DETAIL_TARGET, LIST_TARGET

NOTIFLIX_URL = "https://cdn.jsdelivr.net/npm/notiflix@3.2.7/dist/notiflix-aio-3.2.7.min.js"

# The browser only forwards events and applies what the server sends back.
INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Country search</title>
  <style>
    body { font-family: sans-serif; padding: 24px; }
    #search-box { font-size: 18px; padding: 6px 10px; width: 320px; }
  </style>
  <script src="__NOTIFLIX_URL__"></script>
</head>
<body>
  <input type="text" id="search-box" autocomplete="off" placeholder="Search for any country">
  <ul class="__LIST_TARGET__"></ul>
  <div class="__DETAIL_TARGET__"></div>
  <script>
    const proto = location.protocol === "https:" ? "wss://" : "ws://";
    const socket = new WebSocket(proto + location.host + "__WS_PATH__");
    const searchInput = document.getElementById("search-box");
    const countryList = document.querySelector(".__LIST_TARGET__");

    const send = payload => {
      if (socket.readyState === WebSocket.OPEN) socket.send(JSON.stringify(payload));
    };

    searchInput.addEventListener("input", () => send({ type: "input", value: searchInput.value }));

    countryList.addEventListener("click", event => {
      const listItem = event.target.closest("li");
      send({ type: "select", id: listItem ? listItem.id : null });
    });

    socket.addEventListener("message", event => {
      const msg = JSON.parse(event.data);
      if (msg.type === "patch") {
        const el = document.querySelector("." + msg.target);
        el.innerHTML = msg.html;
        if (msg.style !== null) el.style.cssText = msg.style;
      } else if (msg.type === "notify") {
        Notiflix.Notify[msg.level](msg.message);
      }
    });
  </script>
</body>
</html>
"""


def render_index(ws_path: str) -> str:
    return (
        INDEX_HTML.replace("__NOTIFLIX_URL__", NOTIFLIX_URL)
        .replace("__WS_PATH__", ws_path)
        .replace("__LIST_TARGET__", LIST_TARGET)
        .replace("__DETAIL_TARGET__", DETAIL_TARGET)
    )
